# src/tasktrack/core/errors.py

"""
Error types raised by tasktrack.

Every failure of a constructor or mutator is a ValidationError. It also
subclasses ValueError so callers that only know the standard library can
still catch it.
"""

from __future__ import annotations

from typing import Any


class TaskError(Exception):
    """Base class for all tasktrack errors."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, handy for API error bodies."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "field": self.field,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        return self.message


class ValidationError(TaskError, ValueError):
    """An argument violated a field rule (blank string, bad enum, negative hours, ...)."""
