"""
Configuration module for Moodwave.
"""

from .settings import (
    AppConfig,
    EngineConfig,
    CatalogConfig,
    LoggingConfig,
    VersioningConfig,
    ConfigManager,
    ConfigValidationError,
    DEFAULT_CONFIG_PATH
)

__all__ = [
    'AppConfig',
    'EngineConfig',
    'CatalogConfig',
    'LoggingConfig',
    'VersioningConfig',
    'ConfigManager',
    'ConfigValidationError',
    'DEFAULT_CONFIG_PATH'
]
