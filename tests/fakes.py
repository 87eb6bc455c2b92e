# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from tasktrack.core.ports import FixedClock
from tasktrack.tasks.task import Task

MOCK_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_clock(instant: datetime = MOCK_NOW) -> FixedClock:
    """Deterministic clock pinned at 2024-01-01T12:00:00Z unless told otherwise."""
    return FixedClock(instant)


def valid_task_data(**overrides: Any) -> dict[str, Any]:
    """
    Constructor arguments for a fully populated, valid task.

    Keys match Task(...) parameter names so the dict can be splatted.
    """
    data: dict[str, Any] = {
        "title": "Valid Task Title",
        "description": "Valid task description",
        "user_id": "user123",
        "priority": "high",
        "category": "work",
        "estimated_hours": 4,
        "due_date": "2024-01-08",
    }
    data.update(overrides)
    return data


def make_task(*, clock: FixedClock | None = None, **overrides: Any) -> Task:
    data = valid_task_data(**overrides)
    return Task(
        data.pop("title"),
        data.pop("description"),
        data.pop("user_id"),
        clock=clock or make_clock(),
        **data,
    )


def minimal_task(clock: FixedClock, title: str = "Test Task") -> Task:
    return Task(title, "Description", "user123", clock=clock)
