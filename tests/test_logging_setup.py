# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.core.ports import FixedClock
from tasktrack.logging_setup import (
    LOG_FILE_NAME,
    _ConsoleNoiseFilter,
    _owned,
    setup_logging,
    setup_logging_from_settings,
)
from tasktrack.tasks.task import Task


@pytest.fixture()
def restore_root_logger() -> Iterator[None]:
    # pytest installs its own capture handlers per phase; only drop the ones we added.
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if _owned(h):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("tasktrack.tasks.task", logging.DEBUG))
    assert f.filter(_record("tasktrack", logging.INFO))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


@pytest.mark.usefixtures("restore_root_logger")
def test_file_log_captures_task_events(tmp_path: Path, clock: FixedClock) -> None:
    setup_logging(log_dir=tmp_path, console_level=logging.WARNING)

    task = Task("Logged", "Description", "user123", clock=clock).mark_complete()
    for h in logging.getLogger().handlers:
        h.flush()

    text = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert f"Task created id={task.id}" in text
    assert f"Task completed id={task.id}" in text


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_replaces_handlers(tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(logging.getLogger().handlers) == 2


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_from_settings_without_file(settings: SimpleNamespace) -> None:
    settings.log_to_file = False
    setup_logging_from_settings(settings)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert handlers[0].level == settings.log_level
    assert not settings.log_dir.exists()


def test_console_filter_custom_floor() -> None:
    f = _ConsoleNoiseFilter(package="myapp", floor=logging.WARNING)
    assert f.filter(_record("myapp.web", logging.DEBUG))
    assert not f.filter(_record("myapplication", logging.INFO))
    assert f.filter(_record("tasktrack", logging.WARNING))
    assert not f.filter(_record("tasktrack", logging.INFO))


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_again_closes_previous_file_handler(tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path)
    first = next(h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler))

    setup_logging(log_dir=tmp_path)
    assert first not in logging.getLogger().handlers
    assert first.stream is None
