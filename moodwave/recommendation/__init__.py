"""
Recommendation module for Moodwave.

This module turns emotion profiles into sound targets, blends couple moods,
scores candidate tracks and drives the full playlist pipeline.
"""

from .engine import PlaylistEngine, generate_mood_playlist, generate_couple_playlist
from .blender import MoodBlender, blend
from .target import TargetProfileCalculator, dominant_emotions
from .scorer import TrackScorer
from .similarity import SimilarityCalculator
from .schemas import PlaylistOptions, TargetContext

__all__ = [
    'PlaylistEngine',
    'generate_mood_playlist',
    'generate_couple_playlist',
    'MoodBlender',
    'blend',
    'TargetProfileCalculator',
    'dominant_emotions',
    'TrackScorer',
    'SimilarityCalculator',
    'PlaylistOptions',
    'TargetContext'
]
