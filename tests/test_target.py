"""
Tests for target sound-profile calculation.
"""
import pytest

from moodwave.catalog.sound_features import EMOTION_MAPPINGS, FEATURE_NAMES, FEATURE_RANGES
from moodwave.data.schemas import EmotionProfile
from moodwave.errors import InvalidOptions
from moodwave.recommendation.schemas import TargetContext
from moodwave.recommendation.target import TargetProfileCalculator, dominant_emotions


def assert_within_valid_ranges(features):
    for name in FEATURE_NAMES:
        low, high = FEATURE_RANGES[name]
        assert low <= getattr(features, name) <= high, name


class TestDominantEmotions:

    def test_joy_leads(self):
        profile = EmotionProfile({"joy": 0.9, "sadness": 0.2, "trust": 0.1, "fear": 0.2})
        assert dominant_emotions(profile)[0][0] == "joy"

    def test_top_three_descending(self, joyful_profile):
        assert dominant_emotions(joyful_profile) == [("joy", 0.9), ("trust", 0.6), ("anticipation", 0.3)]

    def test_ties_follow_supplied_order(self):
        profile = EmotionProfile({"trust": 0.5, "anticipation": 0.5, "joy": 0.5})
        assert [name for name, _ in dominant_emotions(profile)] == ["trust", "anticipation", "joy"]

    def test_supplied_order_decides_top_emotion_and_genres(self):
        calculator = TargetProfileCalculator()
        trust_first = calculator.compute_target(EmotionProfile({"trust": 0.6, "joy": 0.6}))
        joy_first = calculator.compute_target(EmotionProfile({"joy": 0.6, "trust": 0.6}))
        assert trust_first.top_emotion == "trust"
        assert joy_first.top_emotion == "joy"
        assert trust_first.genres[0] == EMOTION_MAPPINGS["trust"].genres[0]
        assert joy_first.genres[0] == "pop"


class TestTargetProfileCalculator:

    def test_joyful_scenario_boosts_energy(self, joyful_profile):
        target = TargetProfileCalculator().compute_target(joyful_profile)
        low, high = EMOTION_MAPPINGS["joy"].features["energy"]
        assert target.features.energy > (low + high) / 2
        assert target.top_emotion == "joy"

    def test_joyful_scenario_genres(self, joyful_profile):
        target = TargetProfileCalculator().compute_target(joyful_profile)
        assert target.genres == ("pop", "dance", "funk", "disco", "happy")

    @pytest.mark.parametrize("profile", [
        EmotionProfile({name: 1.0 for name in EMOTION_MAPPINGS}, sentiment=1.0, intensity=1.0),
        EmotionProfile({name: 1.0 for name in EMOTION_MAPPINGS}, sentiment=-1.0, intensity=0.0),
        EmotionProfile({"anger": 1.0}, sentiment=1.0, intensity=1.0),
        EmotionProfile({"sadness": 1.0}, sentiment=-1.0, intensity=0.0),
        EmotionProfile({}),
    ])
    def test_attributes_stay_within_valid_ranges(self, profile):
        calculator = TargetProfileCalculator()
        for context in (None, TargetContext("night", "stormy", "high"), TargetContext("morning", "sunny", "low")):
            assert_within_valid_ranges(calculator.compute_target(profile, context).features)

    def test_all_zero_profile_does_not_divide_by_zero(self):
        target = TargetProfileCalculator().compute_target(EmotionProfile({}))
        assert_within_valid_ranges(target.features)
        assert target.genres == ()
        assert target.top_emotion == "joy"

    def test_deterministic(self, joyful_profile):
        calculator = TargetProfileCalculator()
        context = TargetContext("evening", "rainy")
        first = calculator.compute_target(joyful_profile, context, ["jazz"])
        second = TargetProfileCalculator().compute_target(joyful_profile, context, ["jazz"])
        assert first == second
        assert first.features.to_array().tobytes() == second.features.to_array().tobytes()

    def test_time_context_narrows_listed_attributes_only(self, joyful_profile):
        calculator = TargetProfileCalculator()
        plain = calculator.compute_target(joyful_profile)
        night = calculator.compute_target(joyful_profile, TargetContext(time_of_day="night"))
        assert night.features.energy <= 0.4
        assert 60.0 <= night.features.tempo <= 100.0
        assert -20.0 <= night.features.loudness <= -10.0
        assert night.features.valence == plain.features.valence
        assert night.features.danceability == plain.features.danceability

    def test_weather_applies_after_time(self, joyful_profile):
        target = TargetProfileCalculator().compute_target(
            joyful_profile, TargetContext(time_of_day="night", weather="sunny")
        )
        # sunny lifts the night-capped energy back into its own range
        assert target.features.energy == 0.5

    def test_unknown_context_contributes_nothing(self, joyful_profile):
        calculator = TargetProfileCalculator()
        plain = calculator.compute_target(joyful_profile)
        odd = calculator.compute_target(joyful_profile, TargetContext("teatime", "foggy"))
        assert odd == plain

    @pytest.mark.parametrize("preference,low,high", [
        ("low", 0.0, 0.4),
        ("medium", 0.3, 0.7),
        ("high", 0.6, 1.0),
    ])
    def test_energy_preference_tiers(self, joyful_profile, sad_profile, preference, low, high):
        calculator = TargetProfileCalculator()
        for profile in (joyful_profile, sad_profile):
            target = calculator.compute_target(profile, TargetContext(energy_preference=preference))
            assert low <= target.features.energy <= high

    def test_adaptive_preference_leaves_energy_alone(self, sad_profile):
        calculator = TargetProfileCalculator()
        assert (calculator.compute_target(sad_profile, TargetContext(energy_preference="adaptive"))
                == calculator.compute_target(sad_profile))

    def test_unknown_energy_preference_is_rejected(self):
        with pytest.raises(InvalidOptions):
            TargetContext(energy_preference="extreme")

    def test_preferred_genres_come_first_and_list_is_capped(self, joyful_profile):
        target = TargetProfileCalculator().compute_target(
            joyful_profile, TargetContext(time_of_day="evening"), ["Lo-Fi", "jazz", "pop"]
        )
        assert target.genres[:3] == ("lo-fi", "jazz", "pop")
        assert len(target.genres) == 5
        assert len(set(target.genres)) == 5

    def test_custom_genre_cap(self, joyful_profile):
        target = TargetProfileCalculator(max_genres=2).compute_target(joyful_profile)
        assert target.genres == ("pop", "dance")

    def test_low_weight_emotions_add_no_genres(self, sad_profile):
        target = TargetProfileCalculator().compute_target(sad_profile)
        # fear at 0.3 is not above the genre threshold
        assert target.genres == ("indie", "alternative", "folk", "acoustic", "melancholy")


class TestSentimentAndIntensityAdjustments:
    """Shifts are measured against a neutral reading (sentiment 0, intensity 0.5)."""

    EMOTIONS = {"trust": 0.5}

    def features(self, sentiment=0.0, intensity=0.5, emotions=None):
        profile = EmotionProfile(emotions or self.EMOTIONS, sentiment=sentiment, intensity=intensity)
        return TargetProfileCalculator().compute_target(profile).features

    def test_baseline_is_midpoint_of_trust_ranges(self):
        base = self.features()
        assert base.energy == pytest.approx(0.5)
        assert base.valence == pytest.approx(0.7)
        assert base.tempo == pytest.approx(105.0)
        assert base.acousticness == pytest.approx(0.5)

    def test_positive_sentiment(self):
        base, shifted = self.features(), self.features(sentiment=0.6)
        assert shifted.valence == pytest.approx(base.valence + 0.2)
        assert shifted.energy == pytest.approx(base.energy + 0.1)
        assert shifted.tempo == base.tempo

    def test_negative_sentiment(self):
        base, shifted = self.features(), self.features(sentiment=-0.6)
        assert shifted.valence == pytest.approx(base.valence - 0.2)
        assert shifted.energy == pytest.approx(base.energy - 0.1)
        assert shifted.acousticness == base.acousticness

    @pytest.mark.parametrize("sentiment", [0.3, -0.3])
    def test_sentiment_at_threshold_changes_nothing(self, sentiment):
        assert self.features(sentiment=sentiment) == self.features()

    def test_high_intensity(self):
        base, shifted = self.features(), self.features(intensity=0.8)
        assert shifted.energy == pytest.approx(base.energy + 0.15)
        assert shifted.tempo == pytest.approx(base.tempo + 20.0)
        assert shifted.acousticness == base.acousticness

    def test_low_intensity(self):
        base, shifted = self.features(), self.features(intensity=0.2)
        assert shifted.energy == pytest.approx(base.energy - 0.15)
        assert shifted.acousticness == pytest.approx(base.acousticness + 0.2)
        assert shifted.tempo == base.tempo

    @pytest.mark.parametrize("intensity", [0.3, 0.7])
    def test_intensity_at_threshold_changes_nothing(self, intensity):
        assert self.features(intensity=intensity) == self.features()

    def test_sentiment_and_intensity_combine(self):
        base, shifted = self.features(), self.features(sentiment=0.6, intensity=0.9)
        assert shifted.energy == pytest.approx(base.energy + 0.1 + 0.15)
        assert shifted.valence == pytest.approx(base.valence + 0.2)
        assert shifted.tempo == pytest.approx(base.tempo + 20.0)

    def test_high_intensity_clamps_energy_at_the_top(self):
        joyful = {"joy": 0.9}
        base = self.features(emotions=joyful)
        assert base.energy == pytest.approx(0.97)
        shifted = self.features(intensity=1.0, emotions=joyful)
        assert shifted.energy == 1.0
        assert shifted.tempo == pytest.approx(base.tempo + 20.0)

    def test_negative_sentiment_clamps_at_the_bottom(self):
        shifted = self.features(sentiment=-1.0, emotions={"sadness": 0.2})
        assert shifted.valence == 0.0
        assert shifted.energy == 0.0
