"""
Errors raised by the Emogo core.

Every failure of the store is surfaced as one of these so the presentation
layer can pick a message by kind.
"""

from collections.abc import Iterable


class EmotionLogError(Exception):
    """Base class for all Emogo errors."""


class ValidationError(EmotionLogError, ValueError):
    """Raised when an emotion is not one of the allowed values."""

    def __init__(self, value: object, allowed: Iterable[str]):
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Unknown emotion {value!r}; expected one of: {', '.join(self.allowed)}"
        )


class PersistenceReadError(EmotionLogError):
    """Raised when the stored log cannot be read."""


class SerializationError(PersistenceReadError):
    """Raised when the stored log is not a valid serialized record list."""


class PersistenceWriteError(EmotionLogError):
    """Raised when the log cannot be written or deleted."""


class ShareError(EmotionLogError):
    """Raised when the export collaborator fails to share the log."""
