# src/tasktrack/tasks/task.py

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime
from typing import Any

from ..core.errors import ValidationError
from ..core.ports import SYSTEM_CLOCK, Clock
from .task_models import (
    DEFAULT_CATEGORY,
    NOTE_ID_PREFIX,
    TASK_ID_PREFIX,
    TaskNote,
    TaskPriority,
    TaskStatus,
    format_timestamp,
    parse_optional_timestamp,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400.0

Hours = int | float


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def _require_text(value: Any, *, field: str, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=field)
    return value.strip()


def _normalize_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string", field="description")
    return value.strip()


def _normalize_category(value: Any) -> str:
    return _require_text(
        value, field="category", message="Category must be a non-empty string"
    ).lower()


def _normalize_tag(value: Any) -> str:
    return _require_text(value, field="tags", message="Tag must be a non-empty string").lower()


def _check_hours(value: Any, *, field: str) -> Hours:
    # bool is an int subclass; True hours is never meant.
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or (isinstance(value, float) and not math.isfinite(value))
        or value < 0
    ):
        raise ValidationError(
            f"Hours must be a non-negative number (got {value!r})", field=field
        )
    return value


def _check_optional_hours(value: Any, *, field: str) -> Hours | None:
    if value is None:
        return None
    return _check_hours(value, field=field)


def _restore_tags(raw: Any) -> list[str]:
    tags: list[str] = []
    for tag in raw:
        if not isinstance(tag, str) or not tag.strip() or tag != tag.strip().lower():
            raise ValidationError(
                f"Stored tag must be a trimmed lowercase string (got {tag!r})", field="tags"
            )
        if tag in tags:
            raise ValidationError(f"Duplicate stored tag {tag!r}", field="tags")
        tags.append(tag)
    return tags


def _restore_dependencies(raw: Any, *, task_id: str) -> list[str]:
    deps: list[str] = []
    for dep in raw:
        if not isinstance(dep, str) or not dep.strip():
            raise ValidationError(
                "Dependency must be a non-empty task ID", field="dependencies"
            )
        if dep == task_id:
            raise ValidationError("Task cannot depend on itself", field="dependencies")
        if dep in deps:
            raise ValidationError(f"Duplicate stored dependency {dep!r}", field="dependencies")
        deps.append(dep)
    return deps


class Task:
    """
    A single task record with its validation rules and derived values.

    Mutators validate first and only then touch state, so a failed call leaves
    the task unchanged. Each mutator returns the task itself for chaining.

    Time comes from the injected clock (SystemClock by default).
    """

    def __init__(
        self,
        title: Any,
        description: Any,
        user_id: Any,
        *,
        priority: Any = None,
        category: Any = None,
        assigned_to: Any = None,
        due_date: Any = None,
        estimated_hours: Any = None,
        actual_hours: Any = None,
        clock: Clock | None = None,
    ) -> None:
        title = _require_text(title, field="title", message="Task title is required")
        user_id = _require_text(user_id, field="user_id", message="User ID is required")
        description = _normalize_description(description)
        prio = TaskPriority.MEDIUM if priority is None else TaskPriority.parse(priority)
        cat = _normalize_category(category) if category else DEFAULT_CATEGORY
        assignee = (
            user_id
            if assigned_to is None
            else _require_text(
                assigned_to, field="assigned_to", message="Valid user ID is required"
            )
        )
        due = parse_optional_timestamp(due_date, field="due_date")
        est = _check_optional_hours(estimated_hours, field="estimated_hours")
        act = _check_optional_hours(actual_hours, field="actual_hours")

        self._clock: Clock = clock or SYSTEM_CLOCK
        now = self._clock.now()

        self._id = new_id(TASK_ID_PREFIX)
        self._title = title
        self._description = description
        self._user_id = user_id
        self._assigned_to = assignee
        self._priority = prio
        self._category = cat
        self._status = TaskStatus.PENDING
        self._completed = False
        self._completed_at: datetime | None = None
        self._created_at = now
        self._updated_at = now
        self._due_date = due
        self._estimated_hours = est
        self._actual_hours = act
        self._tags: list[str] = []
        self._notes: list[TaskNote] = []
        self._dependencies: list[str] = []

        logger.debug("Task created id=%s user=%s priority=%s", self._id, user_id, prio)

    def __repr__(self) -> str:
        return f"Task(id={self._id}, title={self._title!r}, status={self._status})"

    # ---- read-only fields ----

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def assigned_to(self) -> str:
        return self._assigned_to

    @property
    def priority(self) -> TaskPriority:
        return self._priority

    @property
    def category(self) -> str:
        return self._category

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def completed(self) -> bool:
        return self._completed

    # datetime objects are immutable, handing them out cannot leak state.
    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def due_date(self) -> datetime | None:
        return self._due_date

    @property
    def estimated_hours(self) -> Hours | None:
        return self._estimated_hours

    @property
    def actual_hours(self) -> Hours | None:
        return self._actual_hours

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    @property
    def notes(self) -> list[TaskNote]:
        return list(self._notes)

    @property
    def dependencies(self) -> list[str]:
        return list(self._dependencies)

    # ---- derived values ----

    @property
    def is_overdue(self) -> bool:
        if self._due_date is None or self._completed:
            return False
        return self._due_date < self._clock.now()

    @property
    def days_until_due(self) -> int | None:
        """Whole days until the due date, rounded up; negative once it has passed."""
        if self._due_date is None:
            return None
        delta = self._due_date - self._clock.now()
        return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)

    @property
    def progress(self) -> float:
        """Percentage of estimated hours already spent, capped at 100."""
        if self._completed:
            return 100.0
        if not self._estimated_hours:
            return 0.0
        spent = self._actual_hours or 0
        return min(100.0, spent / self._estimated_hours * 100.0)

    # ---- internals ----

    def _touch(self) -> None:
        # updated_at never moves backwards, even if the clock does.
        now = self._clock.now()
        if now > self._updated_at:
            self._updated_at = now

    def _set_incomplete(self, status: TaskStatus) -> None:
        self._completed = False
        self._completed_at = None
        self._status = status
        self._touch()

    # ---- field updates ----

    def update_title(self, title: Any) -> Task:
        self._title = _require_text(title, field="title", message="Task title cannot be empty")
        self._touch()
        return self

    def update_description(self, description: Any) -> Task:
        self._description = _normalize_description(description)
        self._touch()
        return self

    def update_priority(self, priority: Any) -> Task:
        self._priority = TaskPriority.parse(priority)
        self._touch()
        return self

    def set_category(self, category: Any) -> Task:
        self._category = _normalize_category(category)
        self._touch()
        return self

    def assign_to(self, user_id: Any) -> Task:
        self._assigned_to = _require_text(
            user_id, field="assigned_to", message="Valid user ID is required"
        )
        self._touch()
        return self

    def reassign_to_owner(self) -> Task:
        self._assigned_to = self._user_id
        self._touch()
        return self

    def set_estimated_hours(self, hours: Any) -> Task:
        self._estimated_hours = _check_optional_hours(hours, field="estimated_hours")
        self._touch()
        return self

    def set_actual_hours(self, hours: Any) -> Task:
        self._actual_hours = _check_optional_hours(hours, field="actual_hours")
        self._touch()
        return self

    def add_time_spent(self, hours: Any) -> Task:
        hours = _check_hours(hours, field="actual_hours")
        self._actual_hours = (self._actual_hours or 0) + hours
        self._touch()
        return self

    # ---- completion ----

    def mark_complete(self) -> Task:
        # First completion wins: repeated calls keep the original completed_at.
        if not self._completed:
            self._completed = True
            self._completed_at = self._clock.now()
            logger.debug("Task completed id=%s", self._id)
        self._status = TaskStatus.COMPLETED
        self._touch()
        return self

    def mark_incomplete(self) -> Task:
        self._set_incomplete(TaskStatus.PENDING)
        return self

    def set_status(self, status: Any) -> Task:
        new_status = TaskStatus.parse(status)
        if new_status is TaskStatus.COMPLETED:
            return self.mark_complete()
        self._set_incomplete(new_status)
        return self

    # ---- tags ----

    def add_tag(self, tag: Any) -> Task:
        tag = _normalize_tag(tag)
        if tag not in self._tags:
            self._tags.append(tag)
            self._touch()
        return self

    def remove_tag(self, tag: Any) -> Task:
        if not isinstance(tag, str):
            return self
        tag = tag.strip().lower()
        if tag in self._tags:
            self._tags.remove(tag)
            self._touch()
        return self

    def has_tag(self, tag: Any) -> bool:
        return isinstance(tag, str) and tag.strip().lower() in self._tags

    def clear_tags(self) -> Task:
        self._tags.clear()
        self._touch()
        return self

    # ---- dependencies ----

    def add_dependency(self, task_id: Any) -> Task:
        if not isinstance(task_id, str) or not task_id.strip():
            raise ValidationError(
                "Dependency must be a non-empty task ID", field="dependencies"
            )
        if task_id == self._id:
            raise ValidationError("Task cannot depend on itself", field="dependencies")
        if task_id not in self._dependencies:
            self._dependencies.append(task_id)
            self._touch()
        return self

    def remove_dependency(self, task_id: Any) -> Task:
        if task_id in self._dependencies:
            self._dependencies.remove(task_id)
            self._touch()
        return self

    def has_dependency(self, task_id: Any) -> bool:
        return task_id in self._dependencies

    # ---- notes ----

    def add_note(self, content: Any, author: str | None = None) -> Task:
        content = _require_text(content, field="notes", message="Note must be a non-empty string")
        self._notes.append(
            TaskNote(
                id=new_id(NOTE_ID_PREFIX),
                content=content,
                author=author,
                created_at=self._clock.now(),
            )
        )
        self._touch()
        return self

    def remove_note(self, note_id: str) -> Task:
        kept = [n for n in self._notes if n.id != note_id]
        if len(kept) != len(self._notes):
            self._notes = kept
            self._touch()
        return self

    # ---- due date ----

    def set_due_date(self, value: Any) -> Task:
        self._due_date = parse_timestamp(value, field="due_date")
        self._touch()
        return self

    def clear_due_date(self) -> Task:
        self._due_date = None
        self._touch()
        return self

    # ---- serialization ----

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "title": self._title,
            "description": self._description,
            "userId": self._user_id,
            "assignedTo": self._assigned_to,
            "priority": self._priority.value,
            "category": self._category,
            "status": self._status.value,
            "completed": self._completed,
            "completedAt": format_timestamp(self._completed_at),
            "createdAt": format_timestamp(self._created_at),
            "updatedAt": format_timestamp(self._updated_at),
            "dueDate": format_timestamp(self._due_date),
            "estimatedHours": self._estimated_hours,
            "actualHours": self._actual_hours,
            "tags": list(self._tags),
            "notes": [n.to_json() for n in self._notes],
            "dependencies": list(self._dependencies),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any], *, clock: Clock | None = None) -> Task:
        """
        Rebuild a task from to_json() output.

        Stored text is taken as-is. Everything a live task guarantees is checked
        (enum values, timestamps, the completion triple, hours, tags and
        dependencies), since the data may come from outside.
        """
        try:
            task_id = str(data["id"])
            title = data["title"]
            user_id = data["userId"]
            created_at = parse_timestamp(data["createdAt"], field="created_at")
        except KeyError as e:
            raise ValidationError(
                f"Serialized task is missing field {e.args[0]!r}", field=e.args[0]
            ) from None

        status = TaskStatus.parse(data.get("status", TaskStatus.PENDING))
        completed = data.get("completed", status is TaskStatus.COMPLETED)
        if not isinstance(completed, bool):
            raise ValidationError(
                f"Serialized field 'completed' must be a boolean (got {completed!r})",
                field="completed",
            )
        completed_at = parse_optional_timestamp(data.get("completedAt"), field="completed_at")
        if not (completed == (status is TaskStatus.COMPLETED) == (completed_at is not None)):
            raise ValidationError(
                f"Inconsistent completion state for task {task_id}: "
                f"completed={completed} status={status} completedAt={completed_at}",
                field="completed",
            )

        updated_raw = data.get("updatedAt")
        updated_at = (
            created_at if updated_raw is None else parse_timestamp(updated_raw, field="updated_at")
        )
        if updated_at < created_at:
            raise ValidationError(
                f"Task {task_id} was updated before it was created", field="updated_at"
            )

        estimated = _check_optional_hours(data.get("estimatedHours"), field="estimated_hours")
        actual = _check_optional_hours(data.get("actualHours"), field="actual_hours")
        tags = _restore_tags(data.get("tags") or [])
        dependencies = _restore_dependencies(data.get("dependencies") or [], task_id=task_id)

        task = cls.__new__(cls)
        task._clock = clock or SYSTEM_CLOCK
        task._id = task_id
        task._title = title
        task._description = data.get("description") or ""
        task._user_id = user_id
        task._assigned_to = data.get("assignedTo") or user_id
        task._priority = TaskPriority.parse(data.get("priority", TaskPriority.MEDIUM))
        task._category = data.get("category") or DEFAULT_CATEGORY
        task._status = status
        task._completed = completed
        task._completed_at = completed_at
        task._created_at = created_at
        task._updated_at = updated_at
        task._due_date = parse_optional_timestamp(data.get("dueDate"), field="due_date")
        task._estimated_hours = estimated
        task._actual_hours = actual
        task._tags = tags
        task._notes = [TaskNote.from_json(n) for n in data.get("notes") or []]
        task._dependencies = dependencies

        logger.debug("Task restored id=%s status=%s", task_id, status)
        return task

    def clone(self) -> Task:
        """Copy of this task under a fresh id; collections are copied, not shared."""
        copy = type(self).from_json(self.to_json(), clock=self._clock)
        copy._id = new_id(TASK_ID_PREFIX)
        return copy
