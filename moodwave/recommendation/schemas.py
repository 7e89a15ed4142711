"""
Recommendation schemas for the Moodwave system.
"""
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from ..catalog.sound_features import EnergyPreference, normalize_key
from ..data.schemas import EmotionProfile
from ..errors import InvalidOptions


ENERGY_PREFERENCES = tuple(p.value for p in EnergyPreference)


def _energy_preference(value: Any) -> str:
    preference = normalize_key(value) or EnergyPreference.ADAPTIVE.value
    if preference not in ENERGY_PREFERENCES:
        raise InvalidOptions(
            f"Energy preference must be one of {list(ENERGY_PREFERENCES)}, got {value!r}"
        )
    return preference


@dataclass(frozen=True)
class TargetContext:
    """Optional context applied on top of the emotion-derived target.

    Time of day and weather are free-form: unknown values simply contribute
    nothing. The energy preference is validated.
    """
    time_of_day: Optional[str] = None
    weather: Optional[str] = None
    energy_preference: str = EnergyPreference.ADAPTIVE.value

    def __post_init__(self):
        object.__setattr__(self, "time_of_day", normalize_key(self.time_of_day) or None)
        object.__setattr__(self, "weather", normalize_key(self.weather) or None)
        object.__setattr__(self, "energy_preference", _energy_preference(self.energy_preference))


@dataclass(frozen=True)
class PlaylistOptions:
    """Options for a playlist request.

    A ``playlist_length`` of None leaves the length to the engine: its
    default length for single playlists, the couple length for couples.
    """
    emotion_profile: EmotionProfile
    playlist_length: Optional[int] = None
    include_popular: bool = True
    include_discovery: bool = True
    time_context: Optional[str] = None
    weather_context: Optional[str] = None
    energy_preference: str = EnergyPreference.ADAPTIVE.value
    genre_preferences: Tuple[str, ...] = ()
    exclude_explicit: bool = False

    def __post_init__(self):
        if not isinstance(self.emotion_profile, EmotionProfile):
            raise InvalidOptions("emotion_profile must be an EmotionProfile")
        if self.playlist_length is not None:
            if isinstance(self.playlist_length, bool) or not isinstance(self.playlist_length, int):
                raise InvalidOptions(f"Playlist length must be an integer, got {self.playlist_length!r}")
            if self.playlist_length <= 0:
                raise InvalidOptions("Playlist length must be positive")
        if isinstance(self.genre_preferences, str):
            raise InvalidOptions("genre_preferences must be a list of strings")
        object.__setattr__(self, "energy_preference", _energy_preference(self.energy_preference))
        object.__setattr__(self, "genre_preferences", normalize_genres(self.genre_preferences))

    @property
    def context(self) -> TargetContext:
        return TargetContext(
            time_of_day=self.time_context,
            weather=self.weather_context,
            energy_preference=self.energy_preference
        )


def normalize_genres(genres: Optional[Sequence[str]]) -> Tuple[str, ...]:
    if not genres:
        return ()
    return tuple(g.strip().lower() for g in genres if g and g.strip())
