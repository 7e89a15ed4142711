"""
FastAPI routes for the Moodwave REST API.
"""
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from .schemas import (
    ContextInput,
    CouplePlaylistRequest,
    EmotionProfileInput,
    EmotionsResponse,
    ErrorResponse,
    HealthResponse,
    MoodPlaylistRequest,
    PlaylistResponse,
    PlaylistSettings,
    TargetRequest,
    TargetResponse
)
from .dependencies import AppState, get_app_state, get_playlist_engine
from ..catalog.sound_features import SoundFeatureCatalog
from ..data.schemas import EmotionProfile
from ..errors import CandidateSourceUnavailable, InvalidOptions
from ..playlist.schemas import GeneratedPlaylist
from ..recommendation.engine import PlaylistEngine
from ..recommendation.schemas import ENERGY_PREFERENCES


router = APIRouter()

PLAYLIST_ERRORS = {
    422: {"model": ErrorResponse, "description": "Invalid playlist options"},
    503: {"model": ErrorResponse, "description": "Catalog or candidate source unavailable"}
}


def _to_profile(payload: EmotionProfileInput) -> EmotionProfile:
    return EmotionProfile.from_dict(payload.model_dump())


def _context_kwargs(request: ContextInput) -> Dict[str, Any]:
    return {
        'time_context': request.time_context,
        'weather_context': request.weather_context,
        'energy_preference': request.energy_preference,
        'genre_preferences': tuple(request.genre_preferences)
    }


def _settings_kwargs(request: PlaylistSettings) -> Dict[str, Any]:
    kwargs = _context_kwargs(request)
    kwargs.update(
        include_popular=request.include_popular,
        include_discovery=request.include_discovery,
        exclude_explicit=request.exclude_explicit
    )
    if request.playlist_length is not None:
        kwargs['playlist_length'] = request.playlist_length
    return kwargs


def _to_response(playlist: GeneratedPlaylist, start_time: float) -> PlaylistResponse:
    data = playlist.to_dict()
    data['processing_time_ms'] = (time.time() - start_time) * 1000
    return PlaylistResponse(**data)


def _raise_http(error: Exception) -> None:
    if isinstance(error, InvalidOptions):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(error)
        )
    if isinstance(error, CandidateSourceUnavailable):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(error)
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to generate playlist: {str(error)}"
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check(state: AppState = Depends(get_app_state)):
    """
    Check the health status of the API.

    Returns the API version and whether a track catalog is loaded.
    """
    return HealthResponse(
        status="healthy",
        version=state.config.versioning.version,
        catalog_loaded=state.catalog_loaded,
        catalog_size=state.catalog_size
    )


@router.get(
    "/emotions",
    response_model=EmotionsResponse,
    tags=["Metadata"],
    summary="List accepted emotions and context values"
)
async def list_emotions():
    """
    Get the emotion names and context values the playlist endpoints understand.

    Unknown time or weather values are accepted but contribute nothing.
    """
    catalog = SoundFeatureCatalog()
    return EmotionsResponse(
        emotions=list(catalog.emotion_names()),
        times_of_day=list(catalog.time_names()),
        weather=list(catalog.weather_names()),
        energy_preferences=list(ENERGY_PREFERENCES)
    )


@router.post(
    "/target",
    response_model=TargetResponse,
    responses={422: PLAYLIST_ERRORS[422]},
    tags=["Playlists"],
    summary="Compute the sound target for an emotion profile"
)
async def compute_target(
    request: TargetRequest,
    engine: PlaylistEngine = Depends(get_playlist_engine)
):
    """
    Preview the sound target and genre seeds a playlist request would use.
    """
    try:
        options = engine.build_options(_to_profile(request.emotion_profile), **_context_kwargs(request))
        return TargetResponse(**engine.compute_target(options).to_dict())
    except InvalidOptions as e:
        _raise_http(e)


@router.post(
    "/playlists/mood",
    response_model=PlaylistResponse,
    responses=PLAYLIST_ERRORS,
    tags=["Playlists"],
    summary="Generate a playlist for one emotion profile"
)
async def create_mood_playlist(
    request: MoodPlaylistRequest,
    engine: PlaylistEngine = Depends(get_playlist_engine)
):
    """
    Generate a playlist matched to your current emotional state.

    **Emotions:** joy, sadness, anger, fear, surprise, disgust, trust, anticipation

    **Example moods:**
    - Euphoric: joy=0.9, anticipation=0.4, sentiment=0.8, intensity=0.8
    - Melancholic: sadness=0.8, sentiment=-0.6, intensity=0.3
    - Calm: trust=0.7, sentiment=0.3, intensity=0.2
    """
    start_time = time.time()
    try:
        options = engine.build_options(_to_profile(request.emotion_profile), **_settings_kwargs(request))
        playlist = await engine.generate_mood_playlist(options)
    except Exception as e:
        _raise_http(e)
    return _to_response(playlist, start_time)


@router.post(
    "/playlists/couple",
    response_model=PlaylistResponse,
    responses=PLAYLIST_ERRORS,
    tags=["Playlists"],
    summary="Generate a shared playlist for two emotion profiles"
)
async def create_couple_playlist(
    request: CouplePlaylistRequest,
    engine: PlaylistEngine = Depends(get_playlist_engine)
):
    """
    Blend two emotional states and generate one playlist for both partners.
    """
    start_time = time.time()
    try:
        playlist = await engine.generate_couple_playlist(
            _to_profile(request.partner_a.emotion_profile),
            _to_profile(request.partner_b.emotion_profile),
            request.partner_a.name,
            request.partner_b.name,
            **_settings_kwargs(request)
        )
    except Exception as e:
        _raise_http(e)
    return _to_response(playlist, start_time)
