"""
Static sound-feature catalog for Moodwave.

Maps emotions, times of day and weather to genre tags and sound-attribute
ranges.
"""

from .sound_features import (
    EMOTION_NAMES,
    FEATURE_NAMES,
    FEATURE_RANGES,
    NEUTRAL_FEATURES,
    ENERGY_TIERS,
    Emotion,
    TimeOfDay,
    Weather,
    EnergyPreference,
    MoodMapping,
    EMPTY_MAPPING,
    SoundFeatureCatalog,
)

__all__ = [
    'EMOTION_NAMES',
    'FEATURE_NAMES',
    'FEATURE_RANGES',
    'NEUTRAL_FEATURES',
    'ENERGY_TIERS',
    'Emotion',
    'TimeOfDay',
    'Weather',
    'EnergyPreference',
    'MoodMapping',
    'EMPTY_MAPPING',
    'SoundFeatureCatalog'
]
