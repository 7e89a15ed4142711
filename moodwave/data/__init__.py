"""
Data module for Moodwave.

This module provides the value types used throughout the engine together
with validation and loading of local track catalogs.
"""

from .schemas import (
    EmotionProfile,
    SoundFeatureVector,
    CandidateTrack,
    ScoredTrack,
    ValidationResult
)
from .validator import DataValidator
from .processor import CatalogProcessor

__all__ = [
    'EmotionProfile',
    'SoundFeatureVector',
    'CandidateTrack',
    'ScoredTrack',
    'ValidationResult',
    'DataValidator',
    'CatalogProcessor'
]
