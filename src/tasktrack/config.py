# src/tasktrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole library.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKTRACK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_log_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: int
    log_dir: Path
    log_to_file: bool

    # ---- Payload validation ----
    title_max_length: int
    description_max_length: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktrack").strip() or "tasktrack"
        log_level = _env_log_level(_k("LOG_LEVEL"), logging.INFO)
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/tasktrack"))
        log_to_file = _env_bool(_k("LOG_TO_FILE"), False)

        # Non-positive limits make no sense; fall back to the defaults.
        title_max_length = _env_int(_k("TITLE_MAX_LENGTH"), 100)
        if title_max_length <= 0:
            title_max_length = 100
        description_max_length = _env_int(_k("DESCRIPTION_MAX_LENGTH"), 500)
        if description_max_length <= 0:
            description_max_length = 500

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            log_to_file=log_to_file,
            title_max_length=title_max_length,
            description_max_length=description_max_length,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
