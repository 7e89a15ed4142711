"""
Playlist engine for Moodwave.
"""
import time
from dataclasses import replace
from typing import Any, List, Optional, Tuple

from ..config.settings import EngineConfig
from ..data.schemas import CandidateTrack, EmotionProfile, TargetProfile
from ..errors import CandidateSourceUnavailable, InvalidOptions
from ..playlist.assembler import PlaylistAssembler
from ..playlist.schemas import AssemblyOptions, GeneratedPlaylist
from ..sources.base import TrackCandidateSource
from ..utils.logging import StructuredLogger
from .blender import MoodBlender
from .schemas import PlaylistOptions
from .scorer import TrackScorer
from .similarity import SimilarityCalculator
from .target import TargetProfileCalculator


class PlaylistEngine:
    """Orchestrates target computation, candidate fetch, scoring and assembly.

    Couple playlists run the same pipeline with a blending step in front.
    Apart from awaiting the candidate source the engine is pure: it keeps no
    state between calls, so one instance can serve concurrent requests.
    """

    def __init__(self, source: TrackCandidateSource,
                 config: Optional[EngineConfig] = None,
                 calculator: Optional[TargetProfileCalculator] = None,
                 blender: Optional[MoodBlender] = None,
                 scorer: Optional[TrackScorer] = None,
                 assembler: Optional[PlaylistAssembler] = None,
                 logger: Optional[StructuredLogger] = None):
        """Initialize the engine.

        Args:
            source: Collaborator that supplies candidate tracks
            config: Engine configuration (defaults when None)
            calculator: Target calculator (optional)
            blender: Mood blender (optional)
            scorer: Track scorer (optional)
            assembler: Playlist assembler (optional)
            logger: Structured logger (optional)
        """
        self.source = source
        self.config = config or EngineConfig()
        self.calculator = calculator or TargetProfileCalculator(max_genres=self.config.max_genres)
        self.blender = blender or MoodBlender()
        self.scorer = scorer or TrackScorer(
            SimilarityCalculator(self.config.similarity_metric),
            popularity_weight=self.config.popularity_weight
        )
        self.assembler = assembler or PlaylistAssembler()
        self.logger = logger or StructuredLogger("moodwave.engine")

    def build_options(self, emotion_profile: EmotionProfile, **overrides: Any) -> PlaylistOptions:
        """PlaylistOptions with configured defaults for anything not overridden."""
        overrides.setdefault('playlist_length', self.config.default_playlist_length)
        return PlaylistOptions(emotion_profile=emotion_profile, **overrides)

    async def generate_mood_playlist(self, options: PlaylistOptions) -> GeneratedPlaylist:
        """Generate a playlist for a single emotion profile.

        Raises:
            InvalidOptions: If the options are malformed
            CandidateSourceUnavailable: If the candidate source fails
        """
        options = self._resolve(options, self.config.default_playlist_length)
        return await self._generate(options)

    async def generate_couple_playlist(self, profile_a: EmotionProfile, profile_b: EmotionProfile,
                                       name_a: str, name_b: str,
                                       options: Optional[PlaylistOptions] = None,
                                       **overrides: Any) -> GeneratedPlaylist:
        """Blend two profiles and generate one shared playlist.

        ``options`` (or keyword overrides) supply everything except the
        profile. When neither sets a length the configured couple length
        applies.
        """
        names = (str(name_a or '').strip(), str(name_b or '').strip())
        if not all(names):
            raise InvalidOptions("Both names are required for a couple playlist")
        for profile in (profile_a, profile_b):
            if not isinstance(profile, EmotionProfile):
                raise InvalidOptions("Couple playlists need two EmotionProfile values")
        blended = self.blender.blend(profile_a, profile_b)
        if options is None:
            options = PlaylistOptions(emotion_profile=blended, **overrides)
        elif isinstance(options, PlaylistOptions):
            options = replace(options, emotion_profile=blended, **overrides)
        options = self._resolve(options, self.config.couple_playlist_length)
        return await self._generate(options, couple_names=names)

    def compute_target(self, options: PlaylistOptions) -> TargetProfile:
        return self.calculator.compute_target(
            options.emotion_profile, options.context, options.genre_preferences
        )

    def candidate_count(self, playlist_length: int) -> int:
        """Number of candidates requested so the ranking has room to choose."""
        return min(playlist_length * self.config.candidate_multiplier, self.config.max_candidates)

    def _resolve(self, options: PlaylistOptions, default_length: int) -> PlaylistOptions:
        """Fill in the default length and check it against the maximum."""
        if not isinstance(options, PlaylistOptions):
            raise InvalidOptions("options must be a PlaylistOptions instance")
        if options.playlist_length is None:
            options = replace(options, playlist_length=default_length)
        if options.playlist_length > self.config.max_playlist_length:
            raise InvalidOptions(
                f"Playlist length cannot exceed {self.config.max_playlist_length}"
            )
        return options

    async def _generate(self, options: PlaylistOptions,
                        couple_names: Optional[Tuple[str, str]] = None) -> GeneratedPlaylist:
        operation = "generate_couple_playlist" if couple_names else "generate_mood_playlist"
        with self.logger.operation_context(
            "PlaylistEngine", operation, playlist_length=options.playlist_length
        ) as log:
            start_time = time.time()
            target = self.compute_target(options)
            log.debug("Target computed",
                      genres=list(target.genres),
                      dominant=[name for name, _ in target.dominant_emotions])
            candidates = await self._fetch(target, options)
            scored = self.scorer.score_all(candidates, target.features, target.top_emotion)
            playlist = self.assembler.assemble(scored, AssemblyOptions(
                length=options.playlist_length,
                mood_context=options.emotion_profile,
                target=target,
                exclude_explicit=options.exclude_explicit,
                time_of_day=options.context.time_of_day,
                couple_names=couple_names
            ))
            if not playlist.tracks:
                log.warning("No candidate tracks survived filtering",
                            total_candidates=len(candidates))
            log.log_playlist(playlist, total_candidates=len(candidates))
            log.metric("playlist_generation", (time.time() - start_time) * 1000)
            return playlist

    async def _fetch(self, target: TargetProfile, options: PlaylistOptions) -> List[CandidateTrack]:
        source_name = getattr(self.source, 'name', type(self.source).__name__)
        try:
            candidates = await self.source.fetch_candidates(
                list(target.genres),
                target.features,
                self.candidate_count(options.playlist_length),
                include_popular=options.include_popular,
                include_discovery=options.include_discovery
            )
        except CandidateSourceUnavailable:
            raise
        except Exception as e:
            raise CandidateSourceUnavailable(
                f"Candidate source '{source_name}' failed: {e}", source=source_name
            ) from e
        if candidates is None:
            raise CandidateSourceUnavailable(
                f"Candidate source '{source_name}' returned no result", source=source_name
            )
        return list(candidates)


async def generate_mood_playlist(options: PlaylistOptions, source: TrackCandidateSource,
                                 config: Optional[EngineConfig] = None) -> GeneratedPlaylist:
    """Convenience wrapper around PlaylistEngine.generate_mood_playlist."""
    return await PlaylistEngine(source, config).generate_mood_playlist(options)


async def generate_couple_playlist(profile_a: EmotionProfile, profile_b: EmotionProfile,
                                   name_a: str, name_b: str, source: TrackCandidateSource,
                                   config: Optional[EngineConfig] = None,
                                   **overrides: Any) -> GeneratedPlaylist:
    """Convenience wrapper around PlaylistEngine.generate_couple_playlist."""
    engine = PlaylistEngine(source, config)
    return await engine.generate_couple_playlist(profile_a, profile_b, name_a, name_b, **overrides)
