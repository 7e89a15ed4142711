"""
Playlist assembly module for Moodwave.

Turns scored tracks into a named, described playlist with a feature summary.
"""

from .assembler import PlaylistAssembler
from .schemas import AssemblyOptions, FeatureSummary, GeneratedPlaylist, PlaylistTrack

__all__ = [
    'PlaylistAssembler',
    'AssemblyOptions',
    'FeatureSummary',
    'GeneratedPlaylist',
    'PlaylistTrack'
]
