"""
Target sound-profile calculation for Moodwave.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..catalog.sound_features import (
    ENERGY_TIERS,
    FEATURE_NAMES,
    FEATURE_RANGES,
    EnergyPreference,
    SoundFeatureCatalog,
    clamp,
)
from ..data.schemas import EmotionProfile, SoundFeatureVector, TargetProfile
from .schemas import TargetContext, normalize_genres


DOMINANT_COUNT = 3
GENRE_THRESHOLD = 0.3
SENTIMENT_THRESHOLD = 0.3
HIGH_INTENSITY = 0.7
LOW_INTENSITY = 0.3


def dominant_emotions(profile: EmotionProfile, count: int = DOMINANT_COUNT) -> List[Tuple[str, float]]:
    """Top emotions by intensity, descending.

    The sort is stable, so tied emotions keep the order the caller supplied
    them in.
    """
    ranked = sorted(profile.emotions.items(), key=lambda item: item[1], reverse=True)
    return ranked[:count]


class TargetProfileCalculator:
    """Turns an emotion profile and optional context into a sound target."""

    def __init__(self, catalog: Optional[SoundFeatureCatalog] = None, max_genres: int = 5):
        self.catalog = catalog or SoundFeatureCatalog()
        self.max_genres = max_genres
        self.logger = logging.getLogger(__name__)

    def compute_target(self, profile: EmotionProfile,
                       context: Optional[TargetContext] = None,
                       preferred_genres: Sequence[str] = ()) -> TargetProfile:
        """Compute the target feature vector and genre seeds for a profile.

        Args:
            profile: Emotion profile to translate
            context: Optional time-of-day, weather and energy preference
            preferred_genres: Caller genres, always kept first

        Returns:
            TargetProfile with a clamped feature vector, up to max_genres
            genre tags and the dominant emotions used
        """
        context = context or TargetContext()
        dominant = dominant_emotions(profile)
        features = self._base_features(dominant)
        self._apply_sentiment(features, profile.sentiment)
        self._apply_intensity(features, profile.intensity)
        self._apply_context(features, context)
        self._apply_energy_preference(features, context.energy_preference)
        genres = self._genres(dominant, context, preferred_genres)
        return TargetProfile(
            features=SoundFeatureVector(**features),
            genres=genres,
            dominant_emotions=tuple(dominant)
        )

    def _base_features(self, dominant: List[Tuple[str, float]]) -> Dict[str, float]:
        sums = {name: 0.0 for name in FEATURE_NAMES}
        total_weight = 0.0
        for emotion, weight in dominant:
            mapping = self.catalog.emotion(emotion)
            for name, (low, high) in mapping.features.items():
                sums[name] += (low + (high - low) * weight) * weight
            total_weight += weight
        if total_weight == 0:
            total_weight = 1.0
        return {
            name: clamp(value / total_weight, FEATURE_RANGES[name])
            for name, value in sums.items()
        }

    @staticmethod
    def _shift(features: Dict[str, float], name: str, delta: float) -> None:
        features[name] = clamp(features[name] + delta, FEATURE_RANGES[name])

    def _apply_sentiment(self, features: Dict[str, float], sentiment: float) -> None:
        if sentiment > SENTIMENT_THRESHOLD:
            self._shift(features, "valence", 0.2)
            self._shift(features, "energy", 0.1)
        elif sentiment < -SENTIMENT_THRESHOLD:
            self._shift(features, "valence", -0.2)
            self._shift(features, "energy", -0.1)

    def _apply_intensity(self, features: Dict[str, float], intensity: float) -> None:
        if intensity > HIGH_INTENSITY:
            self._shift(features, "energy", 0.15)
            self._shift(features, "tempo", 20.0)
        elif intensity < LOW_INTENSITY:
            self._shift(features, "energy", -0.15)
            self._shift(features, "acousticness", 0.2)

    def _apply_context(self, features: Dict[str, float], context: TargetContext) -> None:
        # Overrides only narrow the listed attributes; time first, then weather.
        for label, modifier in (
            ("time_of_day", self.catalog.time_of_day(context.time_of_day)),
            ("weather", self.catalog.weather(context.weather)),
        ):
            key = getattr(context, label)
            if key and modifier.is_empty:
                self.logger.warning("Unknown %s context '%s' ignored", label, key)
                continue
            for name, bounds in modifier.features.items():
                features[name] = clamp(features[name], bounds)

    def _apply_energy_preference(self, features: Dict[str, float], preference: str) -> None:
        if preference == EnergyPreference.ADAPTIVE.value:
            return
        features["energy"] = clamp(features["energy"], ENERGY_TIERS[preference])

    def _genres(self, dominant: List[Tuple[str, float]], context: TargetContext,
                preferred_genres: Sequence[str]) -> Tuple[str, ...]:
        ordered: List[str] = list(normalize_genres(preferred_genres))
        for emotion, weight in dominant:
            if weight > GENRE_THRESHOLD:
                ordered.extend(self.catalog.emotion(emotion).genres)
        ordered.extend(self.catalog.time_of_day(context.time_of_day).genres)
        ordered.extend(self.catalog.weather(context.weather).genres)
        unique = list(dict.fromkeys(ordered))
        return tuple(unique[:self.max_genres])
