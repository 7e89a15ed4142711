"""
Configuration management for Moodwave.

Provides centralized configuration loading, validation, and environment variable overrides.
"""

import os
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
from pathlib import Path


DEFAULT_CONFIG_PATH = str(Path(__file__).with_name("default_config.yaml"))


@dataclass
class EngineConfig:
    """Configuration for playlist generation parameters."""
    default_playlist_length: int = 20
    couple_playlist_length: int = 25
    max_playlist_length: int = 100
    candidate_multiplier: int = 2
    max_candidates: int = 50
    max_genres: int = 5
    popularity_weight: float = 0.2
    similarity_metric: str = "euclidean"


@dataclass
class CatalogConfig:
    """Configuration for the local track catalog source."""
    catalog_path: str = "data/sample_catalog.csv"
    popular_threshold: int = 70
    discovery_threshold: int = 30


@dataclass
class LoggingConfig:
    """Configuration for logging parameters."""
    level: str = "INFO"
    format: str = "json"


@dataclass
class VersioningConfig:
    version: str = "1.0.0"


@dataclass
class AppConfig:
    """Main application configuration containing all sub-configurations."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    versioning: VersioningConfig = field(default_factory=VersioningConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigManager:
    """Manages application configuration loading, validation, and environment overrides."""

    ENV_MAPPINGS = {
        'MOODWAVE_CATALOG_PATH': ['catalog', 'catalog_path'],
        'MOODWAVE_LOG_LEVEL': ['logging', 'level'],
        'MOODWAVE_LOG_FORMAT': ['logging', 'format'],
        'MOODWAVE_VERSION': ['versioning', 'version'],
        'MOODWAVE_PLAYLIST_LENGTH': ['engine', 'default_playlist_length'],
        'MOODWAVE_MAX_CANDIDATES': ['engine', 'max_candidates'],
        'MOODWAVE_POPULARITY_WEIGHT': ['engine', 'popularity_weight'],
        'MOODWAVE_SIMILARITY_METRIC': ['engine', 'similarity_metric'],
    }

    INT_KEYS = {'default_playlist_length', 'max_candidates'}
    FLOAT_KEYS = {'popularity_weight'}

    def __init__(self):
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> Optional[AppConfig]:
        return self._config

    def load(self, config_path: Optional[str] = None) -> AppConfig:
        """
        Load configuration from YAML file with environment variable overrides.

        Args:
            config_path: Path to the YAML configuration file (packaged
                default when None)

        Returns:
            AppConfig: Loaded and validated configuration

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_file = Path(config_path or DEFAULT_CONFIG_PATH)

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigValidationError("Configuration root must be a mapping")

        config_data = self._apply_env_overrides(config_data)
        config = self._create_config_from_dict(config_data)
        self.validate(config)

        self._config = config
        return config

    def _create_config_from_dict(self, config_data: Dict[str, Any]) -> AppConfig:
        """Create AppConfig from dictionary data."""
        sections = {
            'engine': EngineConfig,
            'catalog': CatalogConfig,
            'logging': LoggingConfig,
            'versioning': VersioningConfig,
        }
        built = {}
        for name, section_cls in sections.items():
            section_data = config_data.get(name) or {}
            known = section_cls.__dataclass_fields__
            unknown = set(section_data) - set(known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown keys in '{name}' section: {sorted(unknown)}"
                )
            built[name] = section_cls(**section_data)
        return AppConfig(**built)

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration data."""
        for env_var, config_path in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            current = config_data
            for key in config_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            final_key = config_path[-1]
            try:
                if final_key in self.INT_KEYS:
                    current[final_key] = int(env_value)
                elif final_key in self.FLOAT_KEYS:
                    current[final_key] = float(env_value)
                else:
                    current[final_key] = env_value
            except ValueError as e:
                raise ConfigValidationError(f"Invalid value for {env_var}: {env_value!r}") from e

        return config_data

    def validate(self, config: AppConfig) -> bool:
        """
        Validate configuration values.

        Args:
            config: Configuration to validate

        Returns:
            bool: True if valid

        Raises:
            ConfigValidationError: If validation fails
        """
        errors = []
        engine = config.engine

        if engine.default_playlist_length <= 0:
            errors.append("Engine default_playlist_length must be positive")

        if engine.couple_playlist_length <= 0:
            errors.append("Engine couple_playlist_length must be positive")

        if engine.max_playlist_length < max(engine.default_playlist_length, engine.couple_playlist_length):
            errors.append("Engine max_playlist_length must cover the default lengths")

        if engine.candidate_multiplier <= 0:
            errors.append("Engine candidate_multiplier must be positive")

        if engine.max_candidates <= 0:
            errors.append("Engine max_candidates must be positive")

        if engine.max_genres <= 0:
            errors.append("Engine max_genres must be positive")

        if not (0.0 <= engine.popularity_weight <= 1.0):
            errors.append("Engine popularity_weight must be between 0.0 and 1.0")

        if engine.similarity_metric not in ['euclidean', 'cosine']:
            errors.append("Engine similarity_metric must be 'euclidean' or 'cosine'")

        if not (0 <= config.catalog.discovery_threshold <= config.catalog.popular_threshold <= 100):
            errors.append("Catalog thresholds must satisfy 0 <= discovery_threshold <= popular_threshold <= 100")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.logging.level not in valid_log_levels:
            errors.append(f"Logging level must be one of: {valid_log_levels}")

        if config.logging.format not in ['json', 'text']:
            errors.append("Logging format must be 'json' or 'text'")

        if not config.versioning.version:
            errors.append("Version cannot be empty")

        if errors:
            raise ConfigValidationError(f"Configuration validation failed: {'; '.join(errors)}")

        return True

    def get_with_env_override(self, key: str) -> Any:
        """
        Get configuration value with potential environment variable override.

        Args:
            key: Configuration key in dot notation (e.g., 'engine.max_genres')

        Returns:
            Configuration value
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")

        env_key = f"MOODWAVE_{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)

        if env_value is not None:
            return env_value

        current = self._config
        for k in key.split('.'):
            if hasattr(current, k):
                current = getattr(current, k)
            else:
                raise KeyError(f"Configuration key not found: {key}")

        return current
