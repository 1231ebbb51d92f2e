from __future__ import annotations

import logging
from pathlib import Path

import pytest

from emogo import config
from emogo.config import get_settings
from emogo.logs import configure_logging


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for name in ("EMOGO_DATA_DIR", "EMOGO_STORAGE_KEY", "EMOGO_LOG_LEVEL", "EMOGO_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
    logger = logging.getLogger("emogo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_settings_defaults() -> None:
    settings = get_settings()

    assert settings.data_dir == Path.home() / ".emogo"
    assert settings.storage_key == "emotion_data"
    assert settings.log_level == "WARNING"
    assert settings.log_file is None


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EMOGO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("EMOGO_STORAGE_KEY", "moods")
    monkeypatch.setenv("EMOGO_LOG_LEVEL", "debug")
    monkeypatch.setenv("EMOGO_LOG_FILE", str(tmp_path / "logs" / "emogo.log"))

    settings = get_settings()

    assert settings.data_dir == tmp_path / "data"
    assert settings.storage_key == "moods"
    assert settings.log_level == "DEBUG"
    assert settings.log_file == tmp_path / "logs" / "emogo.log"
    assert settings.log_file.parent.exists()


def test_settings_from_env_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("EMOGO_STORAGE_KEY=from_file\n", encoding="utf-8")

    assert get_settings().storage_key == "from_file"


def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMOGO_LOG_LEVEL", "chatty")

    assert get_settings().log_level == "WARNING"


def test_configure_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    log_file = tmp_path / "emogo.log"
    monkeypatch.setenv("EMOGO_LOG_FILE", str(log_file))
    monkeypatch.setenv("EMOGO_LOG_LEVEL", "INFO")
    settings = get_settings()

    logger = configure_logging(settings)
    configure_logging(settings)

    assert logger.name == "emogo"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2

    logging.getLogger("emogo.store").info("Recorded emotion calm")
    for handler in logger.handlers:
        handler.flush()
    assert "Recorded emotion calm" in log_file.read_text(encoding="utf-8")
