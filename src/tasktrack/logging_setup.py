# src/tasktrack/logging_setup.py

"""
Root logger wiring for applications that embed tasktrack.

The library itself only logs through module loggers (`tasktrack.*`); nothing is
configured on import. An application calls setup_logging() (or
setup_logging_from_settings()) once at startup to get:
- stderr output of tasktrack events at the configured level, with other
  libraries and captured warnings limited to errors
- optionally, every record at DEBUG in <log_dir>/tasktrack.log
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import Settings

LOG_FILE_NAME = "tasktrack.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Pass tasktrack records; everything else (py.warnings included) needs ERROR."""

    def __init__(self, package: str = "tasktrack", floor: int = logging.ERROR) -> None:
        super().__init__()
        self.package = package
        self.floor = floor

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self.package or name.startswith(self.package + "."):
            return True
        return record.levelno >= self.floor


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_tasktrack_owned", False)


def _install(root: logging.Logger, handler: logging.Handler, level: int, fmt: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler._tasktrack_owned = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasktrack",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_to_file: bool = True,
) -> None:
    """
    Replace the root handlers with the tasktrack console (and file) handlers.

    Safe to call again: handlers from a previous call are closed, so the log
    file is never opened twice.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)
        if _owned(h):
            h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_ConsoleNoiseFilter())
    _install(root, console, console_level, fmt)

    if log_to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        _install(
            root,
            logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8"),
            file_level,
            fmt,
        )

    # warnings.warn(...) arrives as 'py.warnings'
    logging.captureWarnings(True)


def setup_logging_from_settings(settings: Settings) -> None:
    setup_logging(
        log_dir=settings.log_dir,
        console_level=settings.log_level,
        log_to_file=settings.log_to_file,
    )
