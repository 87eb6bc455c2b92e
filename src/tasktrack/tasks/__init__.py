"""
Task subsystem.

Components:
- task_models.py: enums (TaskStatus, TaskPriority), TaskNote, timestamp helpers
- task.py: the Task entity (validation, derived values, serialization)
- task_validation.py: payload rules that collect every error at once
"""

from .task import Task
from .task_models import TaskNote, TaskPriority, TaskStatus
from .task_validation import TaskValidator, ValidationReport

__all__ = [
    "Task",
    "TaskNote",
    "TaskPriority",
    "TaskStatus",
    "TaskValidator",
    "ValidationReport",
]
