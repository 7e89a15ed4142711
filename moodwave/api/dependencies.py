"""
FastAPI dependency injection for Moodwave.
"""
import os
from functools import lru_cache
from typing import Optional
import logging

from fastapi import HTTPException, status

from ..config.settings import ConfigManager, AppConfig
from ..utils.logging import StructuredLogger
from ..recommendation.engine import PlaylistEngine
from ..sources.catalog import CatalogTrackSource


logger = logging.getLogger(__name__)


class AppState:
    """Singleton state for the Moodwave application."""

    _instance: Optional["AppState"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.config_manager = ConfigManager()
        self.config: Optional[AppConfig] = None
        self.logger: Optional[StructuredLogger] = None
        self.source: Optional[CatalogTrackSource] = None
        self.engine: Optional[PlaylistEngine] = None
        self._initialized = True

    @property
    def catalog_loaded(self) -> bool:
        return self.source is not None

    @property
    def catalog_size(self) -> int:
        return len(self.source) if self.source is not None else 0

    def initialize(self, config_path: Optional[str] = None) -> None:
        """Initialize the application state."""
        if self.config is not None:
            return

        try:
            self.config = self.config_manager.load(config_path or os.getenv("MOODWAVE_CONFIG"))
            self.logger = StructuredLogger(
                "moodwave.api",
                level=self.config.logging.level,
                fmt=self.config.logging.format
            )
            self.logger.info("Moodwave API initialized")

            self._load_engine()

        except Exception as e:
            logger.error(f"Failed to initialize Moodwave: {e}")
            raise

    def _load_engine(self) -> None:
        """Load the catalog source and build the engine if the catalog exists."""
        catalog_path = self.config.catalog.catalog_path
        if not os.path.exists(catalog_path):
            self.logger.warning(
                "Catalog not found. Set MOODWAVE_CATALOG_PATH to a catalog file.",
                path=catalog_path
            )
            return

        try:
            self.source = CatalogTrackSource.from_file(
                catalog_path,
                config={
                    'popular_threshold': self.config.catalog.popular_threshold,
                    'discovery_threshold': self.config.catalog.discovery_threshold
                }
            )
            self.engine = PlaylistEngine(
                self.source,
                self.config.engine,
                logger=StructuredLogger(
                    "moodwave.engine",
                    level=self.config.logging.level,
                    fmt=self.config.logging.format
                )
            )
            self.logger.info("Playlist engine loaded", catalog_size=len(self.source))

        except Exception as e:
            self.logger.error(f"Failed to load catalog: {e}", path=catalog_path)
            self.source = None
            self.engine = None


@lru_cache()
def get_app_state() -> AppState:
    """Get or create the application state singleton."""
    state = AppState()
    state.initialize()
    return state


def get_playlist_engine() -> PlaylistEngine:
    """Dependency for getting the playlist engine."""
    state = get_app_state()
    if state.engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Playlist engine not loaded. "
                   "Check that the configured catalog file exists and is valid."
        )
    return state.engine


def get_config() -> AppConfig:
    """Dependency for getting the app configuration."""
    state = get_app_state()
    return state.config
