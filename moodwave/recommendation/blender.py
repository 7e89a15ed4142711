"""
Mood blending for couple playlists.
"""
from datetime import datetime
from typing import Optional

from ..catalog.sound_features import EMOTION_NAMES
from ..data.schemas import EmotionProfile, utc_now


class MoodBlender:
    """Combines two emotion profiles into their component-wise centroid."""

    def blend(self, a: EmotionProfile, b: EmotionProfile,
              captured_at: Optional[datetime] = None) -> EmotionProfile:
        """Average two profiles.

        The result is commutative in its inputs, returns an equal profile
        for identical inputs and keeps every emotion between the two input
        values. The blend lists emotions in canonical order whatever order the
        inputs use. ``captured_at`` defaults to the blend time.
        """
        emotions = {
            name: (a.emotions[name] + b.emotions[name]) / 2
            for name in EMOTION_NAMES
        }
        return EmotionProfile(
            emotions=emotions,
            sentiment=(a.sentiment + b.sentiment) / 2,
            intensity=(a.intensity + b.intensity) / 2,
            captured_at=captured_at or utc_now()
        )


def blend(a: EmotionProfile, b: EmotionProfile) -> EmotionProfile:
    return MoodBlender().blend(a, b)
