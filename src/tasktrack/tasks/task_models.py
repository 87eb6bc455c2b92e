# src/tasktrack/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import StrEnum
from typing import Any

from ..core.errors import ValidationError
from ..core.ports import as_utc

DEFAULT_CATEGORY = "general"
TASK_ID_PREFIX = "task"
NOTE_ID_PREFIX = "note"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - only COMPLETED counts as done; every other status clears completion.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid status '{raw}'. Must be one of: {valid}",
                field="status",
            ) from None


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority:
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Invalid priority '{raw}'. Must be one of: {valid}",
                field="priority",
            ) from None


@dataclass(frozen=True, slots=True)
class TaskNote:
    id: str
    content: str
    author: str | None
    created_at: datetime

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "author": self.author,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TaskNote:
        try:
            return cls(
                id=str(data["id"]),
                content=str(data["content"]),
                author=data.get("author"),
                created_at=parse_timestamp(data["createdAt"], field="notes.createdAt"),
            )
        except KeyError as e:
            raise ValidationError(f"Note is missing field {e.args[0]!r}", field="notes") from None


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Any, *, field: str) -> datetime:
    """
    Accept a datetime, a date or an ISO-8601 string and return an aware UTC datetime.

    A bare date means midnight UTC of that day. Anything else, including offsets
    that push the instant outside the datetime range, raises ValidationError.
    """
    try:
        if isinstance(value, datetime):
            return as_utc(value)
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, str) and value.strip():
            return as_utc(datetime.fromisoformat(value.strip()))
    except (ValueError, OverflowError):
        pass
    label = field.replace("_", " ")
    raise ValidationError(f"Invalid {label}: {value!r}", field=field)


def parse_optional_timestamp(value: Any, *, field: str) -> datetime | None:
    if value is None:
        return None
    return parse_timestamp(value, field=field)
