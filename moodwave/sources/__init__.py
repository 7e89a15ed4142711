"""
Candidate track sources for Moodwave.
"""

from .base import TrackCandidateSource
from .catalog import CatalogTrackSource

__all__ = ['TrackCandidateSource', 'CatalogTrackSource']
