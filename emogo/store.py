"""
Emotion log storage for Emogo.

This module provides the store that owns the canonical list of emotion
records and mediates every read and write against a key-value storage
backend. In-memory and persisted state are kept equal: an operation that
cannot complete both leaves both unchanged.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import ValidationError as PydanticValidationError

from .errors import (
    PersistenceReadError,
    PersistenceWriteError,
    SerializationError,
    ValidationError,
)
from .models import (
    Emotion,
    EmotionLog,
    EmotionRecord,
    format_timestamp,
    generate_record_id,
)
from .storage import CorruptValueError, KeyValueStorage, StorageError

DEFAULT_STORAGE_KEY = "emotion_data"

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class EmotionLogStore:
    """
    Append-only emotion log backed by a key-value storage.

    The whole log is kept under a single key as a compact JSON array. The
    store assumes a single writer: callers await each operation before
    issuing the next.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._log = EmotionLog()
        self._loaded = False

    def __len__(self) -> int:
        return len(self._log)

    @property
    def records(self) -> tuple[EmotionRecord, ...]:
        """The current records, oldest first."""
        return tuple(self._log)

    def history(self) -> list[EmotionRecord]:
        """The current records, newest first."""
        return list(reversed(self._log.root))

    async def load(self) -> EmotionLog:
        """
        Read the persisted log and make it the in-memory log.

        Returns:
            The loaded log (empty if nothing is stored)

        Raises:
            PersistenceReadError: The storage read failed
            SerializationError: The stored value is not a valid record list
        """
        try:
            raw = await self._storage.get(self._key)
        except CorruptValueError as e:
            logger.error("Stored emotions under %r are not valid text", self._key)
            raise SerializationError(f"Stored emotion data is malformed: {e}") from e
        except StorageError as e:
            logger.error("Failed to load emotions from %r", self._key, exc_info=True)
            raise PersistenceReadError(f"Failed to load emotions: {e}") from e

        if not raw:
            log = EmotionLog()
        else:
            try:
                log = EmotionLog.model_validate_json(raw)
            except PydanticValidationError as e:
                logger.error("Stored emotions under %r are malformed", self._key)
                raise SerializationError(
                    f"Stored emotion data is malformed: {e.error_count()} error(s)"
                ) from e

        self._log = log
        self._loaded = True
        logger.debug("Loaded %d emotion record(s)", len(log))
        return log

    async def append(self, emotion: Emotion | str) -> EmotionRecord:
        """
        Record a new emotion and persist the updated log.

        Args:
            emotion: The emotion to log, as an Emotion or its value

        Returns:
            The new record with its id and timestamp

        Raises:
            ValidationError: ``emotion`` is not an allowed value
            PersistenceReadError: The log had to be loaded first and that failed
            PersistenceWriteError: The updated log could not be written
        """
        try:
            value = Emotion(emotion)
        except ValueError:
            raise ValidationError(emotion, [e.value for e in Emotion]) from None

        if not self._loaded:
            await self.load()

        now = self._clock()
        record = EmotionRecord(
            id=generate_record_id(now, self._log.ids()),
            emotion=value,
            timestamp=format_timestamp(now),
        )
        updated = self._log.appended(record)

        try:
            await self._storage.set(self._key, updated.model_dump_json())
        except StorageError as e:
            logger.error("Failed to save emotion %s", value, exc_info=True)
            raise PersistenceWriteError(f"Failed to save emotion: {e}") from e

        self._log = updated
        logger.info("Recorded emotion %s as %s", value, record.id)
        return record

    async def clear(self) -> None:
        """
        Remove every record from storage and memory.

        Raises:
            PersistenceWriteError: The stored log could not be deleted
        """
        try:
            await self._storage.delete(self._key)
        except StorageError as e:
            logger.error("Failed to clear emotions", exc_info=True)
            raise PersistenceWriteError(f"Failed to clear emotions: {e}") from e

        self._log = EmotionLog()
        self._loaded = True
        logger.info("Cleared all emotion records")

    def export_serialized(self) -> str:
        """Pretty-printed JSON of the in-memory log, for sharing."""
        return self._log.model_dump_json(indent=2)
