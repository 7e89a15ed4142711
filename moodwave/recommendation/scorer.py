"""
Track scoring for Moodwave.

A track's match score blends its sound-feature similarity to the target with
a smaller popularity term. Justifications are picked by a stable hash of the
track identity and the target, so rescoring the same inputs is reproducible.
"""
import hashlib
import logging
from typing import List, Optional, Sequence

import numpy as np

from ..data.schemas import CandidateTrack, ScoredTrack, SoundFeatureVector
from .similarity import SimilarityCalculator


JUSTIFICATION_TEMPLATES = (
    "Matches your {emotion} mood perfectly",
    "High energy track that complements your emotional state",
    "Popular choice that resonates with your current feelings",
    "Acoustic elements that enhance your {emotion} experience",
    "Perfect tempo for your current emotional intensity",
    "Recommended based on your mood patterns",
)


class TrackScorer:
    """Scores candidate tracks against a target sound-feature vector."""

    def __init__(self, similarity_calculator: Optional[SimilarityCalculator] = None,
                 popularity_weight: float = 0.2):
        if not (0.0 <= popularity_weight <= 1.0):
            raise ValueError("Popularity weight must be between 0.0 and 1.0")
        self.similarity_calculator = similarity_calculator or SimilarityCalculator()
        self.popularity_weight = popularity_weight
        self.logger = logging.getLogger(__name__)

    def score(self, track: CandidateTrack, target: SoundFeatureVector,
              dominant_emotion: str) -> ScoredTrack:
        """Score a single track.

        Args:
            track: Candidate track; missing features use the neutral estimate
            target: Target sound-feature vector
            dominant_emotion: Top dominant emotion named in the justification

        Returns:
            ScoredTrack with a match score in [0, 1]
        """
        return self.score_all([track], target, dominant_emotion)[0]

    def score_all(self, tracks: Sequence[CandidateTrack], target: SoundFeatureVector,
                  dominant_emotion: str) -> List[ScoredTrack]:
        """Score a batch of tracks, preserving input order."""
        if not tracks:
            return []
        features = [track.resolved_features() for track in tracks]
        similarities = self.similarity_calculator.compute_batch_similarity(
            target.to_array(),
            np.array([f.to_array() for f in features])
        )
        scored = []
        for track, vector, similarity in zip(tracks, features, similarities):
            scored.append(ScoredTrack(
                track=track,
                match_score=self.combine(float(similarity), track.popularity),
                justification=self.justify(track, target, dominant_emotion),
                features=vector
            ))
        missing = sum(1 for track in tracks if track.features is None)
        if missing:
            self.logger.debug("Scored %d tracks using neutral feature estimates", missing)
        return scored

    def combine(self, similarity: float, popularity: int) -> float:
        popularity_term = max(0.0, min(100.0, float(popularity))) / 100.0
        value = (1.0 - self.popularity_weight) * similarity + self.popularity_weight * popularity_term
        return max(0.0, min(1.0, value))

    def justify(self, track: CandidateTrack, target: SoundFeatureVector,
                dominant_emotion: str) -> str:
        """Pick a justification template from a stable hash of track and target."""
        target_key = ",".join(f"{v:.4f}" for v in target.to_array())
        digest = hashlib.sha1(f"{track.id}|{target_key}".encode("utf-8")).hexdigest()
        template = JUSTIFICATION_TEMPLATES[int(digest, 16) % len(JUSTIFICATION_TEMPLATES)]
        return template.format(emotion=dominant_emotion)
