"""
Similarity calculation module for Moodwave.
"""
import logging
from typing import List, Tuple

import numpy as np

from ..catalog.sound_features import FEATURE_NAMES, FEATURE_RANGES


SIMILARITY_METRICS = ('euclidean', 'cosine')


class SimilarityCalculator:
    """Calculates similarity scores between sound feature vectors.

    Attributes live on very different scales (dB, BPM, [0, 1]), so every
    vector is first scaled into [0, 1] per attribute using its valid range.
    """

    def __init__(self, metric: str = 'euclidean'):
        if metric not in SIMILARITY_METRICS:
            raise ValueError(f"Similarity metric must be one of {list(SIMILARITY_METRICS)}, got {metric!r}")
        self.metric = metric
        self.logger = logging.getLogger(__name__)
        self._low = np.array([FEATURE_RANGES[name][0] for name in FEATURE_NAMES], dtype=float)
        self._span = np.array(
            [FEATURE_RANGES[name][1] - FEATURE_RANGES[name][0] for name in FEATURE_NAMES],
            dtype=float
        )

    def scale(self, vectors: np.ndarray) -> np.ndarray:
        """Scale raw vectors (1-D or 2-D) into the unit hypercube."""
        return np.clip((vectors - self._low) / self._span, 0.0, 1.0)

    def cosine_similarity(self, v1: np.ndarray, v2: np.ndarray) -> float:
        """Calculate cosine similarity between two vectors.

        Args:
            v1: First vector (numpy array)
            v2: Second vector (numpy array)

        Returns:
            Cosine similarity score in range [-1, 1], where 1 is identical

        Raises:
            ValueError: If vectors have different shapes or are not 1D
        """
        if v1.shape != v2.shape:
            raise ValueError(f"Vector dimensions must match: {v1.shape} vs {v2.shape}")
        if len(v1.shape) != 1:
            raise ValueError("Vectors must be 1-dimensional")
        norm1 = np.linalg.norm(v1)
        norm2 = np.linalg.norm(v2)
        if norm1 == 0 or norm2 == 0:
            if norm1 == 0 and norm2 == 0:
                return 1.0
            else:
                return 0.0
        similarity = np.dot(v1, v2) / (norm1 * norm2)
        return float(np.clip(similarity, -1.0, 1.0))

    def euclidean_distance(self, v1: np.ndarray, v2: np.ndarray) -> float:
        """Calculate Euclidean distance between two vectors.

        Raises:
            ValueError: If vectors have different shapes
        """
        if v1.shape != v2.shape:
            raise ValueError(f"Vector dimensions must match: {v1.shape} vs {v2.shape}")
        return float(np.linalg.norm(v1 - v2))

    def similarity(self, query: np.ndarray, candidate: np.ndarray) -> float:
        """Similarity of two raw feature vectors in [0, 1]."""
        return float(self.compute_batch_similarity(query, candidate.reshape(1, -1))[0])

    def compute_batch_similarity(self, query: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        """Compute similarity between a raw query vector and raw candidates.

        Args:
            query: Query vector of shape (n_features,)
            candidates: Matrix of candidate vectors of shape (n_candidates, n_features)

        Returns:
            Array of similarity scores in [0, 1] of shape (n_candidates,)

        Raises:
            ValueError: If input shapes are invalid or incompatible
        """
        if len(query.shape) != 1:
            raise ValueError("Query must be a 1-dimensional vector")
        if len(candidates.shape) != 2:
            raise ValueError("Candidates must be a 2-dimensional matrix")
        if query.shape[0] != candidates.shape[1]:
            raise ValueError(
                f"Feature dimensions must match: query={query.shape[0]}, "
                f"candidates={candidates.shape[1]}"
            )
        if candidates.shape[0] == 0:
            return np.array([])
        scaled_query = self.scale(query)
        scaled_candidates = self.scale(candidates)
        if self.metric == 'cosine':
            return self._batch_cosine(scaled_query, scaled_candidates)
        distances = np.linalg.norm(scaled_candidates - scaled_query, axis=1)
        max_distance = np.sqrt(scaled_query.shape[0])
        return np.clip(1.0 - distances / max_distance, 0.0, 1.0)

    def _batch_cosine(self, query: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        query_norm = np.linalg.norm(query)
        candidate_norms = np.linalg.norm(candidates, axis=1)
        if query_norm == 0:
            return np.where(candidate_norms == 0, 1.0, 0.0)
        similarities = np.zeros(candidates.shape[0])
        non_zero_mask = candidate_norms != 0
        if np.any(non_zero_mask):
            similarities[non_zero_mask] = (
                np.dot(candidates[non_zero_mask], query) /
                (query_norm * candidate_norms[non_zero_mask])
            )
        # Scaled vectors are non-negative, so cosine already lies in [0, 1].
        return np.clip(similarities, 0.0, 1.0)

    def rank_by_similarity(self, query: np.ndarray, candidates: np.ndarray,
                           descending: bool = True) -> List[Tuple[int, float]]:
        """Rank candidates by similarity to query vector.

        The sort is stable, so equal scores keep candidate order.
        """
        similarities = self.compute_batch_similarity(query, candidates)
        indexed_similarities = [(i, float(s)) for i, s in enumerate(similarities)]
        indexed_similarities.sort(key=lambda x: x[1], reverse=descending)
        return indexed_similarities
