import argparse
import asyncio
import json
import random
import sys
import os
from typing import Optional, Dict, Any
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from moodwave.catalog.sound_features import EMOTION_NAMES, FEATURE_NAMES
from moodwave.config.settings import ConfigManager, AppConfig
from moodwave.utils.logging import StructuredLogger
from moodwave.data.schemas import EmotionProfile
from moodwave.playlist.assembler import PlaylistAssembler
from moodwave.playlist.schemas import GeneratedPlaylist
from moodwave.recommendation.engine import PlaylistEngine
from moodwave.recommendation.schemas import ENERGY_PREFERENCES
from moodwave.sources.catalog import CatalogTrackSource
class MoodwaveApp:
    def __init__(self, config_path: Optional[str] = None, catalog_path: Optional[str] = None):
        self.config_manager = ConfigManager()
        self.config: Optional[AppConfig] = None
        self.logger: Optional[StructuredLogger] = None
        self.config_path = config_path
        self.catalog_path = catalog_path
    def initialize(self) -> None:
        try:
            self.config = self.config_manager.load(self.config_path)
            if self.catalog_path:
                self.config.catalog.catalog_path = self.catalog_path
            self.logger = StructuredLogger(
                "moodwave.main",
                level=self.config.logging.level,
                fmt=self.config.logging.format
            )
            self.logger.log_config(self.config.to_dict())
            self.logger.info("Moodwave initialized successfully")
        except Exception as e:
            print(f"Failed to initialize Moodwave: {e}")
            sys.exit(1)
    def build_engine(self, seed: Optional[int] = None) -> PlaylistEngine:
        catalog = self.config.catalog
        source = CatalogTrackSource.from_file(
            catalog.catalog_path,
            config={
                'popular_threshold': catalog.popular_threshold,
                'discovery_threshold': catalog.discovery_threshold
            }
        )
        self.logger.info("Loaded catalog", path=catalog.catalog_path, num_tracks=len(source))
        return PlaylistEngine(
            source,
            self.config.engine,
            assembler=PlaylistAssembler(rng=random.Random(seed)),
            logger=StructuredLogger(
                "moodwave.engine",
                level=self.config.logging.level,
                fmt=self.config.logging.format
            )
        )
    def show_target(self, profile: EmotionProfile, options: Dict[str, Any]) -> None:
        with self.logger.operation_context("MoodwaveApp", "show_target") as log:
            engine = PlaylistEngine(source=None, config=self.config.engine)
            target = engine.compute_target(engine.build_options(profile, **options))
            log.info("Target computed", genres=list(target.genres))
            print("\n" + "="*60)
            print("MOODWAVE TARGET PROFILE")
            print("="*60)
            print("\nDominant emotions: " + ", ".join(
                f"{name} ({value:.2f})" for name, value in target.dominant_emotions
            ))
            print(f"Genres: {', '.join(target.genres) or '-'}\n")
            for name in FEATURE_NAMES:
                print(f"  {name.capitalize():<17}{getattr(target.features, name):8.3f}")
    def generate_playlist(self, profile: EmotionProfile, options: Dict[str, Any],
                          seed: Optional[int] = None, as_json: bool = False) -> None:
        engine = self.build_engine(seed)
        playlist = asyncio.run(engine.generate_mood_playlist(engine.build_options(profile, **options)))
        self._display_playlist(playlist, as_json)
    def generate_couple_playlist(self, profile_a: EmotionProfile, profile_b: EmotionProfile,
                                 name_a: str, name_b: str, options: Dict[str, Any],
                                 seed: Optional[int] = None, as_json: bool = False) -> None:
        engine = self.build_engine(seed)
        playlist = asyncio.run(engine.generate_couple_playlist(
            profile_a, profile_b, name_a, name_b, **options
        ))
        self._display_playlist(playlist, as_json)
    def _display_playlist(self, playlist: GeneratedPlaylist, as_json: bool = False) -> None:
        if as_json:
            print(json.dumps(playlist.to_dict(), indent=2))
            return
        print("\n" + "="*60)
        print(playlist.name)
        print("="*60)
        print(f"\n{playlist.description}\n")
        if not playlist.tracks:
            return
        summary = playlist.feature_summary
        print(f"Genres: {', '.join(playlist.genres) or '-'}")
        print(f"Energy {summary.avg_energy:.2f} | Valence {summary.avg_valence:.2f} | "
              f"Danceability {summary.avg_danceability:.2f} | "
              f"Acousticness {summary.avg_acousticness:.2f} | Tempo {summary.avg_tempo:.0f} BPM")
        minutes, seconds = divmod(playlist.total_duration_ms // 1000, 60)
        print(f"Total duration: {minutes}m {seconds:02d}s\n")
        for i, track in enumerate(playlist.tracks, 1):
            print(f"{i:2d}. {track.name} - {track.artist}")
            print(f"     Album: {track.album}{' [explicit]' if track.explicit else ''}")
            print(f"     Score: {track.mood_score:.3f} | {track.reason_for_inclusion}")
            print()
def load_profile(path: str) -> EmotionProfile:
    with open(path, 'r', encoding='utf-8') as f:
        return EmotionProfile.from_dict(json.load(f))
def profile_from_args(args: argparse.Namespace) -> EmotionProfile:
    if args.profile:
        return load_profile(args.profile)
    return EmotionProfile(
        emotions={name: getattr(args, name) for name in EMOTION_NAMES},
        sentiment=args.sentiment,
        intensity=args.intensity
    )
def options_from_args(args: argparse.Namespace, with_playlist: bool = True) -> Dict[str, Any]:
    options = {
        'time_context': args.time,
        'weather_context': args.weather,
        'energy_preference': args.energy,
        'genre_preferences': tuple(args.genre or ())
    }
    if with_playlist:
        options.update(
            include_popular=not args.no_popular,
            include_discovery=not args.no_discovery,
            exclude_explicit=args.exclude_explicit
        )
        if args.length is not None:
            options['playlist_length'] = args.length
    return options
def add_emotion_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        help="Path to an emotion profile JSON file (overrides the emotion flags)"
    )
    for name in EMOTION_NAMES:
        parser.add_argument(
            f"--{name}",
            type=float,
            default=0.0,
            help=f"{name.capitalize()} intensity (0.0-1.0)"
        )
    parser.add_argument(
        "--sentiment",
        type=float,
        default=0.0,
        help="Overall sentiment (-1.0-1.0)"
    )
    parser.add_argument(
        "--intensity",
        type=float,
        default=0.5,
        help="Emotional intensity (0.0-1.0)"
    )
def add_context_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--time", help="Time of day (morning, afternoon, evening, night)")
    parser.add_argument("--weather", help="Weather (sunny, rainy, cloudy, stormy)")
    parser.add_argument(
        "--energy",
        default="adaptive",
        choices=ENERGY_PREFERENCES,
        help="Energy preference"
    )
    parser.add_argument(
        "--genre",
        action="append",
        help="Preferred genre (repeatable)"
    )
def add_playlist_arguments(parser: argparse.ArgumentParser) -> None:
    add_context_arguments(parser)
    parser.add_argument(
        "--length",
        type=int,
        help="Number of tracks in the playlist"
    )
    parser.add_argument("--exclude-explicit", action="store_true", help="Drop explicit tracks")
    parser.add_argument("--no-popular", action="store_true", help="Skip highly popular tracks")
    parser.add_argument("--no-discovery", action="store_true", help="Skip lesser-known tracks")
    parser.add_argument("--seed", type=int, help="Seed for reproducible playlist names")
    parser.add_argument("--json", action="store_true", help="Print the playlist as JSON")
def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Moodwave - mood-driven playlist generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (packaged default when omitted)"
    )
    parser.add_argument(
        "--catalog",
        help="Path to a track catalog CSV or JSON file"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    target_parser = subparsers.add_parser("target", help="Show the sound target for a mood")
    add_emotion_arguments(target_parser)
    add_context_arguments(target_parser)
    playlist_parser = subparsers.add_parser("playlist", help="Generate a mood playlist")
    add_emotion_arguments(playlist_parser)
    add_playlist_arguments(playlist_parser)
    couple_parser = subparsers.add_parser("couple", help="Generate a shared playlist for two people")
    couple_parser.add_argument("--profile-a", required=True, help="First partner's profile JSON file")
    couple_parser.add_argument("--profile-b", required=True, help="Second partner's profile JSON file")
    couple_parser.add_argument("--name-a", required=True, help="First partner's name")
    couple_parser.add_argument("--name-b", required=True, help="Second partner's name")
    add_playlist_arguments(couple_parser)
    return parser
def main():
    parser = create_parser()
    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)
    app = MoodwaveApp(args.config, args.catalog)
    app.initialize()
    try:
        if args.command == "target":
            app.show_target(profile_from_args(args), options_from_args(args, with_playlist=False))
        elif args.command == "playlist":
            app.generate_playlist(
                profile_from_args(args),
                options_from_args(args),
                seed=args.seed,
                as_json=args.json
            )
        elif args.command == "couple":
            app.generate_couple_playlist(
                load_profile(args.profile_a),
                load_profile(args.profile_b),
                args.name_a,
                args.name_b,
                options_from_args(args),
                seed=args.seed,
                as_json=args.json
            )
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)
if __name__ == "__main__":
    main()
