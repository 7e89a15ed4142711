"""
Local catalog implementation of the candidate track source.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..data.processor import CatalogProcessor
from ..data.schemas import CandidateTrack, SoundFeatureVector
from ..recommendation.similarity import SimilarityCalculator


class CatalogTrackSource:
    """Serves candidates from an in-memory list of tracks.

    Tracks sharing at least one genre tag with the seeds are preferred; when
    none match, the whole catalog is considered. Popularity hints filter the
    pool and the rest is ordered by similarity to the target.
    """

    name = "catalog"

    def __init__(self, tracks: Sequence[CandidateTrack],
                 similarity_calculator: Optional[SimilarityCalculator] = None,
                 popular_threshold: int = 70,
                 discovery_threshold: int = 30):
        self.tracks = tuple(tracks)
        self.similarity_calculator = similarity_calculator or SimilarityCalculator()
        self.popular_threshold = popular_threshold
        self.discovery_threshold = discovery_threshold
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_file(cls, path: str, config: Optional[Dict[str, Any]] = None,
                  processor: Optional[CatalogProcessor] = None) -> 'CatalogTrackSource':
        """Load a catalog file through CatalogProcessor."""
        config = config or {}
        processor = processor or CatalogProcessor(config)
        tracks = processor.process_full_pipeline(path)
        return cls(
            tracks,
            popular_threshold=config.get('popular_threshold', 70),
            discovery_threshold=config.get('discovery_threshold', 30)
        )

    async def fetch_candidates(self, genres: Sequence[str], target: SoundFeatureVector,
                               limit: int, include_popular: bool = True,
                               include_discovery: bool = True) -> List[CandidateTrack]:
        return self.select(genres, target, limit, include_popular, include_discovery)

    def select(self, genres: Sequence[str], target: SoundFeatureVector, limit: int,
               include_popular: bool = True, include_discovery: bool = True) -> List[CandidateTrack]:
        if limit <= 0 or not self.tracks:
            return []
        seeds = {g.lower() for g in genres}
        pool = [t for t in self.tracks if seeds.intersection(t.genres)]
        if not pool:
            self.logger.debug("No catalog tracks match genres %s; using full catalog", sorted(seeds))
            pool = list(self.tracks)
        if not include_popular:
            pool = [t for t in pool if t.popularity < self.popular_threshold]
        if not include_discovery:
            pool = [t for t in pool if t.popularity >= self.discovery_threshold]
        if not pool:
            return []
        candidates = np.array([t.resolved_features().to_array() for t in pool])
        ranked = self.similarity_calculator.rank_by_similarity(target.to_array(), candidates)
        return [pool[index] for index, _ in ranked[:limit]]

    def __len__(self) -> int:
        return len(self.tracks)
