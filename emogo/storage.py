"""
Key-value persistence for Emogo.

The store talks to storage only through :class:`KeyValueStorage`, so the
backend can be swapped: :class:`MemoryStorage` keeps values in a dict and
:class:`FileStorage` keeps one file per key on local disk.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by a storage backend when a read, write or delete fails."""


class CorruptValueError(StorageError):
    """Raised when a stored value exists but cannot be decoded as text."""


class KeyValueStorage(Protocol):
    """Asynchronous string key-value storage."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStorage:
    """In-memory storage, lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileStorage:
    """
    File-backed storage keeping each key in ``<directory>/<key>.json``.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written value behind. Blocking file I/O runs in a worker
    thread.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, self.path_for(key))

    # MARK: - Blocking helpers

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptValueError(f"Could not decode {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    @staticmethod
    def _write(path: Path, value: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %d characters to %s", len(value), path)

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not delete {path}: {e}") from e
