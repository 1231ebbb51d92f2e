"""
Command-line interface for Emogo.

Each command opens the log kept under the configured data directory, runs one
store operation and reports the outcome.
"""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

import typer

from .config import get_settings
from .errors import (
    PersistenceReadError,
    PersistenceWriteError,
    SerializationError,
    ShareError,
    ValidationError,
)
from .labels import EMOTION_LABELS, label_for
from .logs import configure_logging
from .models import EmotionRecord
from .sharing import FileSharer, ShareResult, StdoutSharer, export_log
from .storage import FileStorage
from .store import EmotionLogStore

app = typer.Typer(help="Emogo - log how you feel")


# MARK: - Commands


@app.command()
def emotions() -> None:
    """List the emotions that can be recorded."""
    for value, label in EMOTION_LABELS.items():
        print(f"{value:<6} {label}")


@app.command()
def record(
    emotion: str = typer.Argument(..., help="The emotion to record"),
) -> None:
    """Record how you feel right now."""

    async def _record() -> None:
        store = _open_store()
        await store.load()
        entry = await store.append(emotion.strip().lower())
        print(f"Emotion recorded! {label_for(entry.emotion)}")

    _run_with_error_handling(_record())


@app.command()
def history(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show recorded emotions, newest first."""

    async def _history() -> None:
        store = _open_store()
        await store.load()

        if json_output:
            print(store.export_serialized())
            return

        print(f"History ({len(store)})")
        for entry in store.history():
            print(_format_record(entry))

    _run_with_error_handling(_history())


@app.command()
def export(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the export to this file"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite the output file without asking"
    ),
) -> None:
    """Export all records as JSON."""

    async def _export() -> None:
        store = _open_store()
        await store.load()

        if output is None:
            await export_log(store, StdoutSharer())
            return

        sharer = FileSharer(output, overwrite=lambda path: force or _confirm_overwrite(path))
        result = await export_log(store, sharer)
        if result is ShareResult.CANCELLED:
            print("Export cancelled")
        else:
            print(f"Exported {len(store)} record(s) to {output}")

    _run_with_error_handling(_export())


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every recorded emotion."""
    if not yes and not typer.confirm("Clear all recorded emotions?"):
        print("Nothing cleared")
        raise typer.Exit(0)

    async def _clear() -> None:
        store = _open_store()
        await store.clear()
        print("All data has been cleared.")

    _run_with_error_handling(_clear())


# MARK: - Private Helpers


def _open_store() -> EmotionLogStore:
    settings = get_settings()
    configure_logging(settings)
    return EmotionLogStore(FileStorage(settings.data_dir), key=settings.storage_key)


def _confirm_overwrite(path: Path) -> bool:
    return typer.confirm(f"{path} exists. Overwrite?")


def _format_record(entry: EmotionRecord) -> str:
    """Format a record as its label and local time."""
    local_time = entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    return f"{label_for(entry.emotion):<10} {local_time}"


def _run_with_error_handling(coro: Coroutine[Any, Any, Any]) -> None:
    """Run an async coroutine, turning store errors into messages and exit codes."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except ValidationError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)
    except SerializationError:
        print("Error: Stored data is corrupted and could not be loaded")
        raise typer.Exit(1)
    except PersistenceReadError:
        print("Error: Failed to load data")
        raise typer.Exit(1)
    except PersistenceWriteError:
        print("Error: Failed to save data")
        raise typer.Exit(1)
    except ShareError as e:
        print(f"Error: Export failed ({e})")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


def main() -> None:
    """Main entry point for the emogo command."""
    app()


if __name__ == "__main__":
    main()
