"""
Application configuration using pydantic-settings.

Environment variables (prefix: BOARDGAME_):
    BOARDGAME_SAVES_DIR      - Directory holding saved games (default: saves)
    BOARDGAME_LOG_LEVEL      - Logging level name (default: INFO)
    BOARDGAME_EVENT_LOG_DIR  - Optional directory for JSONL game logs

Per-game rules live in `boardgame.config.GameConfig`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoardGameSettings(BaseSettings):
    """Environment-driven settings shared by the engine and file handling."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="BOARDGAME_",
    )

    saves_dir: Path = Field(
        default=Path("saves"),
        description="Root directory for board and player save files.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name (DEBUG, INFO, WARNING, ...).",
    )
    event_log_dir: Optional[Path] = Field(
        default=None,
        description="Directory where GameLogger writes JSONL files when no path is given.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Upper-case the level and reject names logging does not know."""
        if not value:
            return "INFO"
        level = str(value).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> BoardGameSettings:
    """Return cached settings instance."""
    return BoardGameSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up basic logging for command-line and test sessions."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
