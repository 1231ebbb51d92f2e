"""
Export collaborators for Emogo.

A sharer receives the serialized log and a title and hands them to the
outside world. The store never interprets the outcome beyond telling a
failure (raised as ShareError) apart from a completed or cancelled share.
"""

import asyncio
import logging
import sys
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from .errors import ShareError
from .store import EmotionLogStore

EXPORT_TITLE = "Emogo Data Export"

logger = logging.getLogger(__name__)


class ShareResult(StrEnum):
    SHARED = "shared"
    CANCELLED = "cancelled"


class Sharer(Protocol):
    async def share(self, text: str, title: str) -> ShareResult: ...


class StdoutSharer:
    """Print the export to standard output, with the title on standard error."""

    async def share(self, text: str, title: str) -> ShareResult:
        print(f"# {title}", file=sys.stderr)
        print(text)
        return ShareResult.SHARED


class FileSharer:
    """
    Write the export to a file.

    If the file already exists, ``overwrite`` is asked (with the path) whether
    to replace it; declining cancels the share.
    """

    def __init__(
        self, path: Path | str, overwrite: Callable[[Path], bool] | None = None
    ) -> None:
        self.path = Path(path)
        self._overwrite = overwrite or (lambda _path: False)

    async def share(self, text: str, title: str) -> ShareResult:
        if self.path.exists() and not self._overwrite(self.path):
            return ShareResult.CANCELLED
        try:
            await asyncio.to_thread(self.path.write_text, text, encoding="utf-8")
        except OSError as e:
            raise ShareError(f"Could not write {self.path}: {e}") from e
        logger.info("Exported %r to %s", title, self.path)
        return ShareResult.SHARED


async def export_log(store: EmotionLogStore, sharer: Sharer) -> ShareResult:
    """Serialize the store's log and hand it to ``sharer``."""
    result = await sharer.share(store.export_serialized(), EXPORT_TITLE)
    logger.debug("Export of %d record(s) finished: %s", len(store), result)
    return result
