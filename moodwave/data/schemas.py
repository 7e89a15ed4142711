"""
Data schemas for the Moodwave system.

This module contains the value types that flow through the engine, from
emotional-state readings to candidate tracks and their scores. All of them
are immutable; derived values are always new instances.
"""

import math
import warnings
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..catalog.sound_features import (
    EMOTION_NAMES,
    FEATURE_NAMES,
    FEATURE_RANGES,
    NEUTRAL_FEATURES,
    clamp,
)
from ..errors import InvalidOptions, UnknownEmotionKey


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
    if value is None:
        return utc_now()
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidOptions(f"Invalid timestamp: {value!r}") from e


@dataclass(frozen=True)
class EmotionProfile:
    """Snapshot of eight emotion intensities plus sentiment and intensity.

    Emotions keep the order the caller supplied them in, which is the
    tie-break order for dominant emotions; names that are not supplied
    follow as 0.0 and unknown names are dropped with an
    ``UnknownEmotionKey`` warning. The capture time does not take part in
    equality.
    """
    emotions: Dict[str, float]
    sentiment: float = 0.0
    intensity: float = 0.5
    captured_at: datetime = field(default_factory=utc_now, compare=False)

    def __post_init__(self):
        unknown = [name for name in self.emotions if name not in EMOTION_NAMES]
        if unknown:
            warnings.warn(f"Unknown emotions ignored: {unknown}", UnknownEmotionKey, stacklevel=3)
        # Supplied names keep the caller's order; missing ones follow as 0.0.
        names = [name for name in self.emotions if name in EMOTION_NAMES]
        names.extend(name for name in EMOTION_NAMES if name not in self.emotions)
        ordered = {}
        for name in names:
            value = float(self.emotions.get(name, 0.0))
            if math.isnan(value) or not (0.0 <= value <= 1.0):
                raise InvalidOptions(f"Emotion {name} must be between 0.0 and 1.0, got {value}")
            ordered[name] = value
        object.__setattr__(self, "emotions", ordered)
        sentiment = float(self.sentiment)
        intensity = float(self.intensity)
        if math.isnan(sentiment) or not (-1.0 <= sentiment <= 1.0):
            raise InvalidOptions(f"Sentiment must be between -1.0 and 1.0, got {sentiment}")
        if math.isnan(intensity) or not (0.0 <= intensity <= 1.0):
            raise InvalidOptions(f"Intensity must be between 0.0 and 1.0, got {intensity}")
        object.__setattr__(self, "sentiment", sentiment)
        object.__setattr__(self, "intensity", intensity)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EmotionProfile':
        """Build a profile from a raw payload.

        Unknown emotion names are dropped with an ``UnknownEmotionKey``
        warning; any other problem raises ``InvalidOptions``.
        """
        from .validator import DataValidator

        result = DataValidator().validate_emotion_payload(data)
        if result.has_errors():
            raise InvalidOptions("Invalid emotion profile: " + "; ".join(result.errors))
        for warning in result.warnings:
            warnings.warn(warning, UnknownEmotionKey, stacklevel=2)
        emotions = {
            name: float(value)
            for name, value in data["emotions"].items()
            if name in EMOTION_NAMES
        }
        return cls(
            emotions=emotions,
            sentiment=float(data.get("sentiment", 0.0)),
            intensity=float(data.get("intensity", 0.5)),
            captured_at=_parse_timestamp(data.get("captured_at", data.get("timestamp"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emotions": dict(self.emotions),
            "sentiment": self.sentiment,
            "intensity": self.intensity,
            "captured_at": self.captured_at.isoformat(),
        }


@dataclass(frozen=True)
class SoundFeatureVector:
    """Point estimate over the nine sound attributes."""
    acousticness: float
    danceability: float
    energy: float
    instrumentalness: float
    liveness: float
    loudness: float     # dB
    speechiness: float
    tempo: float        # BPM
    valence: float

    def to_array(self) -> np.ndarray:
        """Convert to a numpy array in FEATURE_NAMES order."""
        return np.array([getattr(self, name) for name in FEATURE_NAMES], dtype=float)

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FEATURE_NAMES}

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'SoundFeatureVector':
        if len(arr) != len(FEATURE_NAMES):
            raise ValueError(f"Expected array of length {len(FEATURE_NAMES)}, got {len(arr)}")
        return cls(**{name: float(v) for name, v in zip(FEATURE_NAMES, arr)})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SoundFeatureVector':
        """Create a vector from a partial mapping.

        Missing, None or NaN attributes fall back to the neutral defaults.
        """
        values = {}
        for name in FEATURE_NAMES:
            value = data.get(name)
            if value is None or (isinstance(value, float) and math.isnan(value)):
                value = NEUTRAL_FEATURES[name]
            values[name] = float(value)
        return cls(**values)

    @classmethod
    def neutral(cls) -> 'SoundFeatureVector':
        return cls(**dict(NEUTRAL_FEATURES))

    def clamped(self) -> 'SoundFeatureVector':
        """Copy with every attribute clamped into its valid range."""
        return replace(self, **{
            name: clamp(getattr(self, name), FEATURE_RANGES[name])
            for name in FEATURE_NAMES
        })


@dataclass(frozen=True)
class CandidateTrack:
    """A track supplied by a candidate source, with optional sound attributes."""
    id: str
    name: str
    artists: Tuple[str, ...]
    album: str
    duration_ms: int
    explicit: bool = False
    popularity: int = 0
    features: Optional[SoundFeatureVector] = None
    genres: Tuple[str, ...] = ()
    uri: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "artists", tuple(self.artists))
        object.__setattr__(self, "genres", tuple(self.genres))

    @property
    def artist_line(self) -> str:
        return ", ".join(self.artists)

    def resolved_features(self) -> SoundFeatureVector:
        """The track's own vector, or the neutral estimate when it has none."""
        return self.features if self.features is not None else SoundFeatureVector.neutral()


@dataclass(frozen=True)
class ScoredTrack:
    """A candidate track with its match score and inclusion reason."""
    track: CandidateTrack
    match_score: float
    justification: str
    features: SoundFeatureVector

    def __post_init__(self):
        if not (0.0 <= self.match_score <= 1.0):
            raise ValueError("Match score must be between 0.0 and 1.0")


@dataclass
class ValidationResult:
    """Result of data validation operations"""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
    metadata: Optional[Dict[str, Any]] = None

    def add_error(self, error: str) -> None:
        """Add an error to the validation result"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning to the validation result"""
        self.warnings.append(warning)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


@dataclass(frozen=True)
class TargetProfile:
    """Concrete sound target plus the genre seeds derived with it."""
    features: SoundFeatureVector
    genres: Tuple[str, ...]
    dominant_emotions: Tuple[Tuple[str, float], ...]

    @property
    def top_emotion(self) -> str:
        return self.dominant_emotions[0][0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "features": self.features.to_dict(),
            "genres": list(self.genres),
            "dominant_emotions": [
                {"emotion": name, "value": value} for name, value in self.dominant_emotions
            ],
        }
