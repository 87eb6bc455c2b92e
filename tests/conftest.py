# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.core.ports import FixedClock
from tasktrack.tasks.task import Task

from .fakes import make_clock, minimal_task


@pytest.fixture()
def clock() -> FixedClock:
    """Clock frozen at 2024-01-01T12:00:00Z; tests move it explicitly."""
    return make_clock()


@pytest.fixture()
def task(clock: FixedClock) -> Task:
    return minimal_task(clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with TaskValidator.from_settings and logging setup.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tasktrack-test",
        log_level=20,
        log_dir=tmp_path / "logs",
        log_to_file=True,
        title_max_length=20,
        description_max_length=40,
    )
