"""
Error types for Moodwave.

Only malformed caller input and a failed candidate fetch surface as errors;
every numeric step of the pipeline clamps instead of raising.
"""


class MoodwaveError(Exception):
    """Base class for all Moodwave errors."""
    pass


class InvalidOptions(MoodwaveError, ValueError):
    """Raised when caller-supplied options or profiles are malformed."""
    pass


class CandidateSourceUnavailable(MoodwaveError):
    """Raised when the candidate track source fails or times out."""

    def __init__(self, message: str, source: str = "unknown"):
        super().__init__(message)
        self.source = source


class UnknownEmotionKey(UserWarning):
    """Warning category for emotion names outside the fixed set.

    Unknown keys contribute nothing to a profile; they are reported, never
    raised.
    """
    pass
