# src/tasktrack/core/errors.py

"""
Error kinds surfaced by the task core.

None of them is fatal: hosts catch TaskTrackerError and show the message.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for recoverable task-tracker errors."""


class ValidationError(TaskTrackerError):
    """A draft is missing required fields (or has malformed ones)."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid task: {fields}")


class AuthError(TaskTrackerError):
    """Login rejected, or an operation was called without an active session."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class FilterError(TaskTrackerError, ValueError):
    """Unknown category filter name."""
