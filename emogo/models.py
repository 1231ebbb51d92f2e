"""
Shared data models for Emogo.

This module defines the domain models used by the store, the persistence
layer and the CLI: the closed set of emotions, a single logged record and
the ordered log of records.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class Emotion(StrEnum):
    """The emotions a user can log."""

    HAPPY = "happy"
    CALM = "calm"
    SAD = "sad"
    ANGRY = "angry"


class EmotionRecord(BaseModel):
    """A single logged emotion."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Unique record identifier")
    emotion: Emotion = Field(..., description="The logged emotion")
    timestamp: str = Field(..., description="ISO-8601 creation time")

    @field_validator("timestamp")
    @classmethod
    def _validate_timestamp(cls, value: str) -> str:
        datetime.fromisoformat(value)
        return value

    @property
    def created_at(self) -> datetime:
        """The creation time as a datetime (UTC when no offset was stored)."""
        dt = datetime.fromisoformat(self.timestamp)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt


class EmotionLog(RootModel[list[EmotionRecord]]):
    """Records in insertion order, oldest first."""

    root: list[EmotionRecord] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def _validate_unique_ids(cls, records: list[EmotionRecord]) -> list[EmotionRecord]:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise ValueError(f"duplicate record id: {record.id}")
            seen.add(record.id)
        return records

    def __iter__(self):  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> EmotionRecord:
        return self.root[index]

    def ids(self) -> set[str]:
        return {record.id for record in self.root}

    def appended(self, record: EmotionRecord) -> "EmotionLog":
        """Return a new log with ``record`` added at the end."""
        return EmotionLog([*self.root, record])


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    utc = moment.astimezone(UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_record_id(moment: datetime, taken: Iterable[str] = ()) -> str:
    """
    Derive a record id from ``moment`` in epoch milliseconds.

    Args:
        moment: The creation time of the record
        taken: Ids already present in the log

    Returns:
        The millisecond value as text, bumped until it is not in ``taken``
    """
    used = set(taken)
    candidate = int(moment.timestamp() * 1000)
    while str(candidate) in used:
        candidate += 1
    return str(candidate)
