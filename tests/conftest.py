"""
Test bootstrap and shared fixtures.

Pytest does not automatically add the repo root to sys.path, so the
``moodwave`` package can fail to import when tests run from another
working directory. The path is normalized here before any fixture imports.
"""
import os
import sys

import pytest


_HERE = os.path.dirname(os.path.abspath(__file__))
_ROOT = os.path.abspath(os.path.join(_HERE, os.pardir))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from moodwave.data.schemas import CandidateTrack, EmotionProfile, SoundFeatureVector  # noqa: E402


SAMPLE_CATALOG = os.path.join(_ROOT, "data", "sample_catalog.csv")


class FakeSource:
    """Candidate source that returns a fixed pool and records its calls."""

    name = "fake"

    def __init__(self, tracks=(), error=None):
        self.tracks = list(tracks)
        self.error = error
        self.calls = []

    async def fetch_candidates(self, genres, target, limit,
                               include_popular=True, include_discovery=True):
        self.calls.append({
            "genres": list(genres),
            "target": target,
            "limit": limit,
            "include_popular": include_popular,
            "include_discovery": include_discovery,
        })
        if self.error is not None:
            raise self.error
        return self.tracks[:limit]


@pytest.fixture
def sample_catalog_path():
    return SAMPLE_CATALOG


@pytest.fixture
def make_track():
    """Factory for candidate tracks with an optional feature override."""
    def _make(track_id, explicit=False, popularity=50, duration_ms=200000,
              genres=("pop",), features=None, **overrides):
        if features is None and overrides:
            features = SoundFeatureVector.neutral()
        if overrides:
            values = features.to_dict()
            values.update(overrides)
            features = SoundFeatureVector(**values)
        return CandidateTrack(
            id=track_id,
            name=f"Track {track_id}",
            artists=("Artist One", "Artist Two"),
            album="Album",
            duration_ms=duration_ms,
            explicit=explicit,
            popularity=popularity,
            features=features,
            genres=genres
        )
    return _make


@pytest.fixture
def joyful_profile():
    return EmotionProfile(
        emotions={
            "joy": 0.9, "sadness": 0.1, "anger": 0.0, "fear": 0.0,
            "surprise": 0.2, "disgust": 0.0, "trust": 0.6, "anticipation": 0.3
        },
        sentiment=0.6,
        intensity=0.7
    )


@pytest.fixture
def sad_profile():
    return EmotionProfile(
        emotions={"sadness": 0.8, "fear": 0.3},
        sentiment=-0.6,
        intensity=0.2
    )


@pytest.fixture
def fake_source_cls():
    return FakeSource
