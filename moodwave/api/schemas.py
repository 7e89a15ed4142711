"""
Pydantic schemas for the Moodwave REST API.
"""
from datetime import datetime
from typing import Optional, List, Dict

from pydantic import BaseModel, Field, field_validator

from ..catalog.sound_features import EMOTION_NAMES


class EmotionProfileInput(BaseModel):
    """Emotional state reading used to drive a playlist."""
    emotions: Dict[str, float] = Field(
        description=f"Emotion intensities (0.0-1.0) keyed by name: {', '.join(EMOTION_NAMES)}"
    )
    sentiment: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="Overall sentiment (-1.0 negative to 1.0 positive)"
    )
    intensity: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Strength of the emotional state (0.0-1.0)"
    )
    captured_at: Optional[datetime] = Field(
        default=None,
        description="When the reading was taken (defaults to now)"
    )

    @field_validator("emotions")
    @classmethod
    def check_emotion_values(cls, value: Dict[str, float]) -> Dict[str, float]:
        for name, intensity in value.items():
            if not (0.0 <= intensity <= 1.0):
                raise ValueError(f"Emotion {name} must be between 0.0 and 1.0")
        return value


class ContextInput(BaseModel):
    """Context shared by target and playlist requests."""
    time_context: Optional[str] = Field(
        default=None,
        description="Time of day: morning, afternoon, evening or night"
    )
    weather_context: Optional[str] = Field(
        default=None,
        description="Weather: sunny, rainy, cloudy or stormy"
    )
    energy_preference: str = Field(
        default="adaptive",
        description="Energy tier: low, medium, high or adaptive"
    )
    genre_preferences: List[str] = Field(
        default_factory=list,
        description="Genres placed ahead of the emotion-derived genres"
    )


class PlaylistSettings(ContextInput):
    """Options shared by single and couple playlist requests."""
    playlist_length: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of tracks (server default when omitted)"
    )
    include_popular: bool = Field(default=True, description="Allow highly popular tracks")
    include_discovery: bool = Field(default=True, description="Allow lesser-known tracks")
    exclude_explicit: bool = Field(default=False, description="Drop tracks flagged explicit")


class TargetRequest(ContextInput):
    """Request body for the target profile endpoint."""
    emotion_profile: EmotionProfileInput


class MoodPlaylistRequest(PlaylistSettings):
    """Request body for a single-profile playlist."""
    emotion_profile: EmotionProfileInput


class PartnerInput(BaseModel):
    name: str = Field(min_length=1, description="Display name used in the playlist title")
    emotion_profile: EmotionProfileInput


class CouplePlaylistRequest(PlaylistSettings):
    """Request body for a shared playlist built from two blended profiles."""
    partner_a: PartnerInput
    partner_b: PartnerInput


class DominantEmotionResponse(BaseModel):
    emotion: str
    value: float


class TargetResponse(BaseModel):
    """Computed sound target."""
    features: Dict[str, float] = Field(description="Target value per sound attribute")
    genres: List[str] = Field(description="Genre seeds, preferences first")
    dominant_emotions: List[DominantEmotionResponse] = Field(
        description="Strongest emotions, in descending order"
    )


class TrackResponse(BaseModel):
    """Individual track in a generated playlist."""
    id: str = Field(description="Track ID")
    name: str = Field(description="Track name")
    artist: str = Field(description="Comma-joined artist names")
    album: str = Field(description="Album name")
    duration_ms: int = Field(ge=0, description="Track length in milliseconds")
    mood_score: float = Field(
        ge=0.0,
        le=1.0,
        description="Match score against the target"
    )
    reason_for_inclusion: str = Field(description="Why this track was picked")
    explicit: bool = False
    uri: Optional[str] = None


class FeatureSummaryResponse(BaseModel):
    avg_energy: float
    avg_valence: float
    avg_danceability: float
    avg_acousticness: float
    avg_tempo: float


class MoodContextResponse(BaseModel):
    """Emotion profile a playlist was generated for."""
    emotions: Dict[str, float]
    sentiment: float
    intensity: float
    captured_at: datetime


class PlaylistResponse(BaseModel):
    """Response body for the playlist endpoints."""
    name: str
    description: str
    tracks: List[TrackResponse]
    mood_context: MoodContextResponse = Field(
        description="Profile the playlist was built for; the blended profile for couples"
    )
    feature_summary: FeatureSummaryResponse
    total_duration_ms: int = Field(ge=0)
    genres: List[str]
    target: TargetResponse
    created_at: datetime
    processing_time_ms: float = Field(
        ge=0.0,
        description="Time taken to process the request in milliseconds"
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="API status")
    version: str = Field(description="API version")
    catalog_loaded: bool = Field(description="Whether the track catalog is loaded")
    catalog_size: int = Field(ge=0, description="Number of tracks in the catalog")


class EmotionsResponse(BaseModel):
    """Vocabulary accepted by the request bodies."""
    emotions: List[str]
    times_of_day: List[str]
    weather: List[str]
    energy_preferences: List[str]


class ErrorResponse(BaseModel):
    """Error response format."""
    error: str = Field(description="Error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")
