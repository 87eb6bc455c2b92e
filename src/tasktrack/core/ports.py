# src/tasktrack/core/ports.py

"""
Ports (interfaces) used by the task entity.

The entity asks an injected Clock for "now" instead of reading the process clock
directly, so tests can pin time without patching global state.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant (timezone-aware, UTC)."""
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock that only moves when told to.

    - set(...) jumps to an instant (naive values are treated as UTC)
    - advance(...) moves forward by a timedelta (same kwargs as timedelta)
    """

    def __init__(self, instant: datetime) -> None:
        self._now = as_utc(instant)

    def now(self) -> datetime:
        return self._now

    def set(self, instant: datetime) -> None:
        self._now = as_utc(instant)

    def advance(self, **delta: float) -> datetime:
        self._now = self._now + timedelta(**delta)
        return self._now


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


SYSTEM_CLOCK = SystemClock()
