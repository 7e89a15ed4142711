"""
API module for the Moodwave REST API.
"""
from .routes import router
from .schemas import (
    EmotionProfileInput,
    MoodPlaylistRequest,
    CouplePlaylistRequest,
    PlaylistResponse,
    TargetResponse,
    HealthResponse
)

__all__ = [
    "router",
    "EmotionProfileInput",
    "MoodPlaylistRequest",
    "CouplePlaylistRequest",
    "PlaylistResponse",
    "TargetResponse",
    "HealthResponse"
]
