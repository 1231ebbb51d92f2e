"""
Configuration for Emogo.

Settings are read from `EMOGO_*` environment variables and an optional `.env`
file in the working directory.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .store import DEFAULT_STORAGE_KEY


class Settings(BaseSettings):
    """Emogo configuration loaded from ``EMOGO_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EMOGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".emogo")
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    log_level: str = Field(default="WARNING")
    log_file: Path | None = Field(default=None)

    @field_validator("data_dir", mode="before")
    @classmethod
    def _expand_data_dir(cls, value: Path | str) -> Path:
        return Path(value).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        if not value:
            return "WARNING"
        normalized = str(value).upper()
        if normalized not in logging.getLevelNamesMapping():
            return "WARNING"
        return normalized

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str | None) -> Path | None:
        if value in (None, ""):
            return None
        path = Path(value).expanduser()
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache
def get_settings() -> Settings:
    return Settings()
