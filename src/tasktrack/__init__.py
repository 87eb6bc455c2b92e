"""
tasktrack: a Task entity with validation, derived values and a stable JSON shape.

    from tasktrack import Task

    task = Task("Write report", "Q3 numbers", "user123", priority="high")
    task.add_tag("Work").set_due_date("2024-12-31").set_estimated_hours(4)
    data = task.to_json()
    same = Task.from_json(data)
"""

from .core.errors import TaskError, ValidationError
from .core.ports import Clock, FixedClock, SystemClock
from .tasks import Task, TaskNote, TaskPriority, TaskStatus, TaskValidator, ValidationReport

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "Task",
    "TaskError",
    "TaskNote",
    "TaskPriority",
    "TaskStatus",
    "TaskValidator",
    "ValidationError",
    "ValidationReport",
]
