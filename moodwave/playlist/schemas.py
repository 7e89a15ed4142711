"""
Playlist schemas for the Moodwave system.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..data.schemas import EmotionProfile, TargetProfile, utc_now
from ..errors import InvalidOptions


@dataclass(frozen=True)
class AssemblyOptions:
    """Everything the assembler needs besides the scored tracks."""
    length: int
    mood_context: EmotionProfile
    target: TargetProfile
    exclude_explicit: bool = False
    time_of_day: Optional[str] = None
    couple_names: Optional[Tuple[str, str]] = None

    def __post_init__(self):
        if self.length < 0:
            raise InvalidOptions("Playlist length cannot be negative")


@dataclass(frozen=True)
class PlaylistTrack:
    """Summary of a selected track as it appears in a playlist."""
    id: str
    name: str
    artist: str
    album: str
    duration_ms: int
    mood_score: float
    reason_for_inclusion: str
    explicit: bool = False
    uri: Optional[str] = None


@dataclass(frozen=True)
class FeatureSummary:
    avg_energy: float = 0.0
    avg_valence: float = 0.0
    avg_danceability: float = 0.0
    avg_acousticness: float = 0.0
    avg_tempo: float = 0.0


@dataclass(frozen=True)
class GeneratedPlaylist:
    """The finished playlist handed to presentation layers."""
    name: str
    description: str
    tracks: Tuple[PlaylistTrack, ...]
    mood_context: EmotionProfile
    feature_summary: FeatureSummary
    total_duration_ms: int
    target: TargetProfile
    genres: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, "tracks", tuple(self.tracks))
        if self.total_duration_ms < 0:
            raise ValueError("Total duration cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tracks": [vars(track).copy() for track in self.tracks],
            "mood_context": self.mood_context.to_dict(),
            "feature_summary": vars(self.feature_summary).copy(),
            "total_duration_ms": self.total_duration_ms,
            "target": self.target.to_dict(),
            "genres": list(self.genres),
            "created_at": self.created_at.isoformat(),
        }
