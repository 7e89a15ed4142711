"""
Moodwave REST API Server

Run the server with:
    python api.py

Or with uvicorn directly:
    uvicorn api:app --reload --host 0.0.0.0 --port 8000

MOODWAVE_HOST, MOODWAVE_PORT and MOODWAVE_CORS_ORIGINS (comma-separated)
override the defaults below.
"""
import sys
import os
from typing import List

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodwave.api.routes import router
from moodwave.api.dependencies import get_app_state
from moodwave.config.settings import VersioningConfig


API_PREFIXES = ("/api/v1", "")

DESCRIPTION = """
**Mood-driven playlist API**

Send an emotional state (eight emotion intensities plus sentiment and
intensity) and get back a playlist whose sound matches it.

- `GET /emotions` lists the accepted emotions, times of day and weather
- `POST /target` previews the sound target and genre seeds for a state
- `POST /playlists/mood` builds a playlist for one person
- `POST /playlists/couple` blends two states into one shared playlist

Every route is served both at the root and under `/api/v1`.
"""


def cors_origins() -> List[str]:
    raw = os.getenv("MOODWAVE_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    app = FastAPI(
        title="Moodwave",
        description=DESCRIPTION,
        version=VersioningConfig().version,
        license_info={"name": "MIT"}
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    for prefix in API_PREFIXES:
        app.include_router(router, prefix=prefix)

    @app.on_event("startup")
    async def report_catalog():
        """Load config and catalog up front so the first request is fast."""
        try:
            state = get_app_state()
        except Exception as e:
            print(f"Moodwave failed to initialize: {e}")
            return
        if state.catalog_loaded:
            state.logger.info("Moodwave API ready", catalog_size=state.catalog_size)
        else:
            state.logger.warning(
                "Moodwave API started without a catalog; playlist routes return 503"
            )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=os.getenv("MOODWAVE_HOST", "0.0.0.0"),
        port=int(os.getenv("MOODWAVE_PORT", "8000")),
        reload=True
    )
