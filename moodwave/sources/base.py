"""
Candidate track source contract.

The engine never fetches tracks itself; it awaits a source that returns
candidates for a set of genre seeds and a target vector.
"""
from typing import List, Protocol, Sequence, runtime_checkable

from ..data.schemas import CandidateTrack, SoundFeatureVector


@runtime_checkable
class TrackCandidateSource(Protocol):
    """Anything that can supply candidate tracks for a target.

    Implementations own their own I/O, retries and timeouts. Any exception
    they raise is reported by the engine as ``CandidateSourceUnavailable``.
    """

    async def fetch_candidates(self, genres: Sequence[str], target: SoundFeatureVector,
                               limit: int, include_popular: bool = True,
                               include_discovery: bool = True) -> List[CandidateTrack]:
        ...
