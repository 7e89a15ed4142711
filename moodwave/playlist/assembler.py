"""
Playlist assembly for Moodwave.

Filters, ranks and truncates scored tracks, summarizes their sound features
and writes a name and description for the result.
"""
import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..data.schemas import EmotionProfile, ScoredTrack, utc_now
from .schemas import (
    AssemblyOptions,
    FeatureSummary,
    GeneratedPlaylist,
    PlaylistTrack,
)


EMOTION_ADJECTIVES = {
    "joy": ("Joyful", "Happy", "Uplifting", "Bright", "Cheerful"),
    "sadness": ("Melancholy", "Reflective", "Contemplative", "Gentle", "Soothing"),
    "anger": ("Intense", "Powerful", "Energetic", "Bold", "Strong"),
    "fear": ("Atmospheric", "Mysterious", "Ambient", "Ethereal", "Calm"),
    "trust": ("Warm", "Comforting", "Soulful", "Heartfelt", "Genuine"),
    "anticipation": ("Exciting", "Dynamic", "Progressive", "Building", "Energizing"),
    "surprise": ("Eclectic", "Diverse", "Unexpected", "Unique", "Adventurous"),
    "disgust": ("Alternative", "Raw", "Authentic", "Unfiltered", "Real"),
}

NAME_SUFFIXES = (
    "Vibes", "Journey", "Moments", "Feelings", "Experience",
    "Soundtrack", "Collection", "Mix", "Session", "Flow",
)

COUPLE_SEPARATORS = ("&", "+", "and")

SUMMARY_FIELDS = (
    ("avg_energy", "energy"),
    ("avg_valence", "valence"),
    ("avg_danceability", "danceability"),
    ("avg_acousticness", "acousticness"),
    ("avg_tempo", "tempo"),
)


def format_date(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def sentiment_polarity(profile: EmotionProfile) -> str:
    if profile.sentiment > 0:
        return "positive"
    if profile.sentiment < 0:
        return "reflective"
    return "balanced"


class PlaylistAssembler:
    """Builds a GeneratedPlaylist from scored tracks.

    The name vocabulary is fixed; the word choice comes from ``rng`` so a
    seeded ``random.Random`` makes names reproducible. ``clock`` supplies
    the creation time and date shown in names.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.logger = logging.getLogger(__name__)

    def assemble(self, scored: Sequence[ScoredTrack], options: AssemblyOptions) -> GeneratedPlaylist:
        """Filter, rank, truncate and describe a set of scored tracks.

        Never pads: fewer candidates than ``options.length`` yield a shorter
        playlist, and an empty pool yields a playlist with no tracks.
        """
        selected = self.select(scored, options.length, options.exclude_explicit)
        now = self.clock()
        emotion = options.target.top_emotion
        if options.couple_names:
            name_a, name_b = options.couple_names
            name = self.couple_name(name_a, name_b, emotion, now)
            description = self.couple_description(name_a, name_b, emotion, len(selected))
        else:
            name = self.playlist_name(emotion, options.time_of_day, now)
            description = self.playlist_description(emotion, options.mood_context, len(selected))
        return GeneratedPlaylist(
            name=name,
            description=description,
            tracks=tuple(self._to_playlist_track(item) for item in selected),
            mood_context=options.mood_context,
            feature_summary=self.summarize(selected),
            total_duration_ms=sum(item.track.duration_ms for item in selected),
            target=options.target,
            genres=options.target.genres,
            created_at=now
        )

    def select(self, scored: Sequence[ScoredTrack], length: int,
               exclude_explicit: bool = False) -> List[ScoredTrack]:
        candidates = [s for s in scored if not (exclude_explicit and s.track.explicit)]
        if len(candidates) < len(scored):
            self.logger.debug("Excluded %d explicit tracks", len(scored) - len(candidates))
        # sorted() is stable: equal scores keep candidate order.
        ranked = sorted(candidates, key=lambda s: s.match_score, reverse=True)
        return ranked[:length]

    def summarize(self, selected: Sequence[ScoredTrack]) -> FeatureSummary:
        """Mean of the selected tracks' own feature vectors."""
        if not selected:
            return FeatureSummary()
        matrix = np.array([
            [getattr(item.features, attribute) for _, attribute in SUMMARY_FIELDS]
            for item in selected
        ], dtype=float)
        means = matrix.mean(axis=0)
        return FeatureSummary(**{
            field_name: float(value)
            for (field_name, _), value in zip(SUMMARY_FIELDS, means)
        })

    def playlist_name(self, emotion: str, time_of_day: Optional[str], now: datetime) -> str:
        time_prefix = f"{time_of_day.capitalize()} " if time_of_day else ""
        adjective = self.rng.choice(EMOTION_ADJECTIVES.get(emotion, ("Mood",)))
        suffix = self.rng.choice(NAME_SUFFIXES)
        return f"{time_prefix}{adjective} {suffix} - {format_date(now)}"

    def playlist_description(self, emotion: str, profile: EmotionProfile, track_count: int) -> str:
        sentiment = sentiment_polarity(profile)
        if track_count == 0:
            return (
                f"No tracks matched your {emotion} mood with {sentiment} energy this time. "
                f"Try widening your genre preferences or allowing explicit tracks."
            )
        return (
            f"A personalized {track_count}-track playlist designed to complement your "
            f"{emotion} mood with {sentiment} energy. Each song is selected to resonate "
            f"with your current emotional state."
        )

    def couple_name(self, name_a: str, name_b: str, emotion: str, now: datetime) -> str:
        separator = self.rng.choice(COUPLE_SEPARATORS)
        return f"{name_a} {separator} {name_b}'s {emotion.capitalize()} Connection - {format_date(now)}"

    def couple_description(self, name_a: str, name_b: str, emotion: str, track_count: int) -> str:
        if track_count == 0:
            return (
                f"No shared tracks matched the blended {emotion} mood of "
                f"{name_a} and {name_b} this time."
            )
        return (
            f"A shared {track_count}-track journey for {name_a} and {name_b}, blending "
            f"both emotional energies into a harmonious {emotion}-focused playlist."
        )

    @staticmethod
    def _to_playlist_track(item: ScoredTrack) -> PlaylistTrack:
        track = item.track
        return PlaylistTrack(
            id=track.id,
            name=track.name,
            artist=track.artist_line,
            album=track.album,
            duration_ms=track.duration_ms,
            mood_score=item.match_score,
            reason_for_inclusion=item.justification,
            explicit=track.explicit,
            uri=track.uri
        )
