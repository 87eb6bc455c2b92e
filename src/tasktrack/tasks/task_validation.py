# src/tasktrack/tasks/task_validation.py

"""
Input validation for task payloads (create / partial update).

Unlike the Task entity, which raises on the first bad argument, the rules here
collect every problem so a caller (form, API handler) can report them together.

Rules:
- TitleRule: required, length bounds, no HTML tags
- DescriptionRule: optional, max length, no HTML tags
- PriorityRule: optional (defaults to medium), case-insensitive
- DueDateRule: optional, must parse, must be today or later

Payload keys are snake_case; the serialized key `dueDate` (as produced by
Task.to_json) is accepted for `due_date`.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import ValidationError
from ..core.ports import SYSTEM_CLOCK, Clock
from .task_models import TaskPriority, parse_timestamp

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]*>")


def contains_html(text: str) -> bool:
    return _HTML_TAG.search(text) is not None


def sanitize(text: str) -> str:
    return html.escape(text, quote=True)


@dataclass(frozen=True, slots=True)
class FieldResult:
    is_valid: bool
    errors: list[str]
    sanitized_value: Any = None


class TitleRule:
    def __init__(self, min_length: int = 1, max_length: int = 100) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, value: Any) -> FieldResult:
        if not value:
            return FieldResult(False, ["Title is required"])
        if not isinstance(value, str):
            return FieldResult(False, ["Title must be a string"])

        text = value.strip()
        errors: list[str] = []
        if not text:
            errors.append("Title cannot be empty or only whitespace")
        if len(text) < self.min_length:
            errors.append(f"Title must be at least {self.min_length} character(s)")
        if len(text) > self.max_length:
            errors.append(f"Title must be no more than {self.max_length} characters")
        if contains_html(text):
            errors.append("Title cannot contain HTML tags")
        return FieldResult(not errors, errors, sanitize(text))


class DescriptionRule:
    def __init__(self, max_length: int = 500) -> None:
        self.max_length = max_length

    def validate(self, value: Any) -> FieldResult:
        if not value:
            return FieldResult(True, [], "")
        if not isinstance(value, str):
            return FieldResult(False, ["Description must be a string"])

        text = value.strip()
        errors: list[str] = []
        if len(text) > self.max_length:
            errors.append(f"Description must be no more than {self.max_length} characters")
        if contains_html(text):
            errors.append("Description cannot contain HTML tags")
        return FieldResult(not errors, errors, sanitize(text))


class PriorityRule:
    def validate(self, value: Any) -> FieldResult:
        if not value:
            return FieldResult(True, [], TaskPriority.MEDIUM.value)
        normalized = str(value).strip().lower()
        if normalized not in {p.value for p in TaskPriority}:
            valid = ", ".join(p.value for p in TaskPriority)
            return FieldResult(False, [f"Priority must be one of: {valid}"], normalized)
        return FieldResult(True, [], normalized)


class DueDateRule:
    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or SYSTEM_CLOCK

    def validate(self, value: Any) -> FieldResult:
        if not value:
            return FieldResult(True, [], None)
        try:
            due = parse_timestamp(value, field="due_date")
        except ValidationError:
            return FieldResult(False, ["Due date must be a valid date"])

        day = due.date()
        if day < self.clock.now().date():
            return FieldResult(False, ["Due date must be today or in the future"], day.isoformat())
        return FieldResult(True, [], day.isoformat())


@dataclass(slots=True)
class ValidationReport:
    is_valid: bool
    errors: list[str]
    field_results: dict[str, FieldResult] = field(default_factory=dict)
    sanitized_data: dict[str, Any] = field(default_factory=dict)

    def raise_for_errors(self) -> None:
        if self.is_valid:
            return
        raise ValidationError(
            "; ".join(self.errors),
            details={"errors": list(self.errors)},
        )


class TaskValidator:
    """Runs the field rules over a payload and merges their results."""

    FIELDS = ("title", "description", "priority", "due_date")
    KEY_ALIASES = {"dueDate": "due_date"}

    def __init__(
        self,
        *,
        title: TitleRule | None = None,
        description: DescriptionRule | None = None,
        priority: PriorityRule | None = None,
        due_date: DueDateRule | None = None,
    ) -> None:
        self._rules = {
            "title": title or TitleRule(),
            "description": description or DescriptionRule(),
            "priority": priority or PriorityRule(),
            "due_date": due_date or DueDateRule(),
        }

    @classmethod
    def from_settings(cls, settings: Any, *, clock: Clock | None = None) -> TaskValidator:
        return cls(
            title=TitleRule(max_length=settings.title_max_length),
            description=DescriptionRule(max_length=settings.description_max_length),
            due_date=DueDateRule(clock),
        )

    def validate_task(self, data: Mapping[str, Any]) -> ValidationReport:
        """Validate a full create payload; missing fields get their defaults."""
        data = self._with_aliases(data)
        return self._run({name: data.get(name) for name in self.FIELDS})

    def validate_task_update(self, updates: Mapping[str, Any]) -> ValidationReport:
        """Validate only the fields present in a partial update."""
        updates = self._with_aliases(updates)
        return self._run({name: updates[name] for name in self.FIELDS if name in updates})

    def _with_aliases(self, data: Mapping[str, Any]) -> dict[str, Any]:
        # snake_case keys win when both spellings are present.
        merged = {self.KEY_ALIASES.get(k, k): v for k, v in data.items() if k in self.KEY_ALIASES}
        merged.update((k, v) for k, v in data.items() if k not in self.KEY_ALIASES)
        return merged

    def _run(self, values: dict[str, Any]) -> ValidationReport:
        results: dict[str, FieldResult] = {}
        errors: list[str] = []
        sanitized: dict[str, Any] = {}

        for name, value in values.items():
            res = self._rules[name].validate(value)
            results[name] = res
            if res.is_valid:
                sanitized[name] = res.sanitized_value
            else:
                errors.extend(f"{name}: {err}" for err in res.errors)

        if errors:
            logger.debug("Task payload rejected errors=%s", errors)
        return ValidationReport(
            is_valid=not errors,
            errors=errors,
            field_results=results,
            sanitized_data=sanitized,
        )
