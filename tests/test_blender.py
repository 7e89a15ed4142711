"""
Tests for couple mood blending.
"""
import random
from datetime import datetime, timezone

import pytest

from moodwave.catalog.sound_features import EMOTION_NAMES
from moodwave.data.schemas import EmotionProfile
from moodwave.recommendation.blender import MoodBlender, blend


def random_profile(rng):
    return EmotionProfile(
        emotions={name: rng.random() for name in EMOTION_NAMES},
        sentiment=rng.uniform(-1.0, 1.0),
        intensity=rng.random()
    )


class TestMoodBlender:

    def test_blend_with_itself(self, joyful_profile):
        blended = blend(joyful_profile, joyful_profile)
        assert blended == joyful_profile
        assert blended.emotions == joyful_profile.emotions
        assert blended.sentiment == 0.6
        assert blended.intensity == 0.7

    @pytest.mark.parametrize("seed", range(5))
    def test_commutative(self, seed):
        rng = random.Random(seed)
        a, b = random_profile(rng), random_profile(rng)
        assert blend(a, b) == blend(b, a)

    @pytest.mark.parametrize("seed", range(5))
    def test_idempotent(self, seed):
        a = random_profile(random.Random(seed))
        assert blend(a, a) == a

    def test_values_lie_between_inputs(self, joyful_profile, sad_profile):
        blended = blend(joyful_profile, sad_profile)
        for name in EMOTION_NAMES:
            low, high = sorted((joyful_profile.emotions[name], sad_profile.emotions[name]))
            assert low <= blended.emotions[name] <= high
        assert blended.sentiment == pytest.approx(0.0)
        assert blended.intensity == pytest.approx(0.45)

    def test_capture_time(self, joyful_profile, sad_profile):
        moment = datetime(2024, 2, 14, 20, tzinfo=timezone.utc)
        blended = MoodBlender().blend(joyful_profile, sad_profile, captured_at=moment)
        assert blended.captured_at == moment
