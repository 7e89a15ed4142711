"""
Static emotion to sound-feature knowledge for Moodwave.

The tables below are plain immutable data: for each emotion a set of genre
tags and a target [min, max] range for every sound attribute, plus partial
overrides keyed by time of day and weather.
"""
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Tuple, Union


FeatureRange = Tuple[float, float]


class Emotion(str, Enum):
    JOY = "joy"
    SADNESS = "sadness"
    ANGER = "anger"
    FEAR = "fear"
    SURPRISE = "surprise"
    DISGUST = "disgust"
    TRUST = "trust"
    ANTICIPATION = "anticipation"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class Weather(str, Enum):
    SUNNY = "sunny"
    RAINY = "rainy"
    CLOUDY = "cloudy"
    STORMY = "stormy"


class EnergyPreference(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ADAPTIVE = "adaptive"


# Canonical order of the eight emotions.
EMOTION_NAMES: Tuple[str, ...] = tuple(e.value for e in Emotion)

FEATURE_NAMES: Tuple[str, ...] = (
    "acousticness",
    "danceability",
    "energy",
    "instrumentalness",
    "liveness",
    "loudness",
    "speechiness",
    "tempo",
    "valence",
)

# Globally valid range of each attribute.
FEATURE_RANGES: Mapping[str, FeatureRange] = MappingProxyType({
    "acousticness": (0.0, 1.0),
    "danceability": (0.0, 1.0),
    "energy": (0.0, 1.0),
    "instrumentalness": (0.0, 1.0),
    "liveness": (0.0, 1.0),
    "loudness": (-60.0, 0.0),
    "speechiness": (0.0, 1.0),
    "tempo": (40.0, 200.0),
    "valence": (0.0, 1.0),
})

# Estimate used for tracks that arrive without (some) sound attributes.
NEUTRAL_FEATURES: Mapping[str, float] = MappingProxyType({
    "acousticness": 0.5,
    "danceability": 0.5,
    "energy": 0.5,
    "instrumentalness": 0.0,
    "liveness": 0.1,
    "loudness": -10.0,
    "speechiness": 0.1,
    "tempo": 120.0,
    "valence": 0.5,
})

ENERGY_TIERS: Mapping[str, FeatureRange] = MappingProxyType({
    "low": (0.0, 0.4),
    "medium": (0.3, 0.7),
    "high": (0.6, 1.0),
})


class MoodMapping(NamedTuple):
    """Genre tags and attribute ranges contributed by one catalog entry."""
    genres: Tuple[str, ...]
    features: Mapping[str, FeatureRange]

    @property
    def is_empty(self) -> bool:
        return not self.genres and not self.features


EMPTY_MAPPING = MoodMapping(genres=(), features=MappingProxyType({}))


def _mapping(genres, features: Dict[str, FeatureRange]) -> MoodMapping:
    return MoodMapping(genres=tuple(genres), features=MappingProxyType(dict(features)))


EMOTION_MAPPINGS: Mapping[str, MoodMapping] = MappingProxyType({
    "joy": _mapping(
        ["pop", "dance", "funk", "disco", "happy", "upbeat"],
        {
            "acousticness": (0.0, 0.4),
            "danceability": (0.6, 1.0),
            "energy": (0.7, 1.0),
            "instrumentalness": (0.0, 0.3),
            "liveness": (0.0, 0.5),
            "loudness": (-8.0, -2.0),
            "speechiness": (0.0, 0.4),
            "tempo": (120.0, 180.0),
            "valence": (0.7, 1.0),
        },
    ),
    "sadness": _mapping(
        ["indie", "alternative", "folk", "acoustic", "melancholy", "blues"],
        {
            "acousticness": (0.4, 1.0),
            "danceability": (0.0, 0.4),
            "energy": (0.0, 0.4),
            "instrumentalness": (0.0, 0.6),
            "liveness": (0.0, 0.3),
            "loudness": (-20.0, -8.0),
            "speechiness": (0.0, 0.3),
            "tempo": (60.0, 100.0),
            "valence": (0.0, 0.3),
        },
    ),
    "anger": _mapping(
        ["rock", "metal", "punk", "hardcore", "aggressive", "industrial"],
        {
            "acousticness": (0.0, 0.3),
            "danceability": (0.3, 0.7),
            "energy": (0.8, 1.0),
            "instrumentalness": (0.0, 0.5),
            "liveness": (0.0, 0.6),
            "loudness": (-5.0, 0.0),
            "speechiness": (0.0, 0.5),
            "tempo": (130.0, 200.0),
            "valence": (0.0, 0.4),
        },
    ),
    "fear": _mapping(
        ["ambient", "dark-ambient", "experimental", "minimal", "atmospheric"],
        {
            "acousticness": (0.3, 0.8),
            "danceability": (0.0, 0.4),
            "energy": (0.2, 0.6),
            "instrumentalness": (0.3, 1.0),
            "liveness": (0.0, 0.3),
            "loudness": (-25.0, -10.0),
            "speechiness": (0.0, 0.2),
            "tempo": (70.0, 120.0),
            "valence": (0.0, 0.4),
        },
    ),
    "surprise": _mapping(
        ["electronic", "experimental", "world", "fusion", "eclectic"],
        {
            "acousticness": (0.0, 0.7),
            "danceability": (0.3, 0.8),
            "energy": (0.4, 0.9),
            "instrumentalness": (0.0, 0.7),
            "liveness": (0.0, 0.5),
            "loudness": (-12.0, -3.0),
            "speechiness": (0.0, 0.4),
            "tempo": (90.0, 160.0),
            "valence": (0.3, 0.8),
        },
    ),
    "disgust": _mapping(
        ["grunge", "alternative", "industrial", "noise", "dark"],
        {
            "acousticness": (0.0, 0.4),
            "danceability": (0.0, 0.5),
            "energy": (0.3, 0.8),
            "instrumentalness": (0.0, 0.6),
            "liveness": (0.0, 0.4),
            "loudness": (-15.0, -5.0),
            "speechiness": (0.0, 0.6),
            "tempo": (80.0, 140.0),
            "valence": (0.0, 0.3),
        },
    ),
    "trust": _mapping(
        ["soul", "r-n-b", "gospel", "jazz", "smooth", "classic"],
        {
            "acousticness": (0.2, 0.8),
            "danceability": (0.4, 0.8),
            "energy": (0.3, 0.7),
            "instrumentalness": (0.0, 0.4),
            "liveness": (0.0, 0.4),
            "loudness": (-15.0, -5.0),
            "speechiness": (0.0, 0.4),
            "tempo": (80.0, 130.0),
            "valence": (0.5, 0.9),
        },
    ),
    "anticipation": _mapping(
        ["electronic", "progressive", "trance", "build-up", "cinematic"],
        {
            "acousticness": (0.0, 0.5),
            "danceability": (0.4, 0.9),
            "energy": (0.6, 1.0),
            "instrumentalness": (0.0, 0.8),
            "liveness": (0.0, 0.4),
            "loudness": (-10.0, -2.0),
            "speechiness": (0.0, 0.3),
            "tempo": (110.0, 170.0),
            "valence": (0.4, 0.8),
        },
    ),
})

TIME_MODIFIERS: Mapping[str, MoodMapping] = MappingProxyType({
    "morning": _mapping(
        ["acoustic", "folk", "indie", "chill", "coffee-shop"],
        {"energy": (0.3, 0.7), "acousticness": (0.3, 0.8), "tempo": (80.0, 120.0)},
    ),
    "afternoon": _mapping(
        ["pop", "rock", "upbeat", "energetic"],
        {"energy": (0.5, 0.9), "danceability": (0.4, 0.8), "tempo": (100.0, 140.0)},
    ),
    "evening": _mapping(
        ["jazz", "soul", "r-n-b", "smooth", "romantic"],
        {"energy": (0.2, 0.6), "valence": (0.4, 0.8), "acousticness": (0.2, 0.7)},
    ),
    "night": _mapping(
        ["ambient", "chillout", "downtempo", "lo-fi", "sleep"],
        {"energy": (0.0, 0.4), "loudness": (-20.0, -10.0), "tempo": (60.0, 100.0)},
    ),
})

WEATHER_MODIFIERS: Mapping[str, MoodMapping] = MappingProxyType({
    "sunny": _mapping(
        ["tropical", "reggae", "beach", "summer", "upbeat"],
        {"valence": (0.6, 1.0), "energy": (0.5, 0.9), "danceability": (0.5, 0.9)},
    ),
    "rainy": _mapping(
        ["indie", "alternative", "melancholy", "acoustic", "contemplative"],
        {"acousticness": (0.4, 0.9), "energy": (0.1, 0.5), "valence": (0.2, 0.6)},
    ),
    "cloudy": _mapping(
        ["ambient", "atmospheric", "dreamy", "ethereal"],
        {"instrumentalness": (0.3, 0.8), "energy": (0.2, 0.6), "acousticness": (0.3, 0.7)},
    ),
    "stormy": _mapping(
        ["dramatic", "cinematic", "intense", "orchestral"],
        {"energy": (0.6, 1.0), "loudness": (-8.0, 0.0), "instrumentalness": (0.2, 0.9)},
    ),
})


Key = Union[str, Enum, None]


def normalize_key(key: Key) -> str:
    """Lower-case string form of a catalog key (enum members allowed)."""
    if key is None:
        return ""
    if isinstance(key, Enum):
        key = key.value
    return str(key).strip().lower()


def clamp(value: float, bounds: FeatureRange) -> float:
    low, high = bounds
    return max(low, min(high, value))


class SoundFeatureCatalog:
    """Read-only lookups over the emotion, time-of-day and weather tables.

    Unknown keys return EMPTY_MAPPING; a lookup never raises.
    """

    def __init__(self,
                 emotions: Mapping[str, MoodMapping] = EMOTION_MAPPINGS,
                 times: Mapping[str, MoodMapping] = TIME_MODIFIERS,
                 weather: Mapping[str, MoodMapping] = WEATHER_MODIFIERS):
        self._emotions = emotions
        self._times = times
        self._weather = weather

    def emotion(self, key: Key) -> MoodMapping:
        return self._emotions.get(normalize_key(key), EMPTY_MAPPING)

    def time_of_day(self, key: Key) -> MoodMapping:
        return self._times.get(normalize_key(key), EMPTY_MAPPING)

    def weather(self, key: Key) -> MoodMapping:
        return self._weather.get(normalize_key(key), EMPTY_MAPPING)

    def feature_range(self, name: str) -> FeatureRange:
        """Globally valid range for an attribute."""
        return FEATURE_RANGES[name]

    def emotion_names(self) -> Tuple[str, ...]:
        return tuple(self._emotions.keys())

    def time_names(self) -> Tuple[str, ...]:
        return tuple(self._times.keys())

    def weather_names(self) -> Tuple[str, ...]:
        return tuple(self._weather.keys())
