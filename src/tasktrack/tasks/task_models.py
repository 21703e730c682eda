# src/tasktrack/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from ..core.errors import FilterError


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> TaskStatus:
        return TaskStatus.PENDING if self is TaskStatus.COMPLETED else TaskStatus.COMPLETED


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: TaskPriority | str | None) -> TaskPriority | None:
        """
        Parse user-supplied priority text (case-insensitive).

        Missing/blank -> MEDIUM, unknown text -> None.
        """
        if isinstance(raw, TaskPriority):
            return raw
        if raw is None or not str(raw).strip():
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class CategoryFilter(StrEnum):
    """
    Categorical filter applied on top of the text search.

    ALL accepts everything, the status members compare Task.status,
    the priority members compare Task.priority.
    """

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: CategoryFilter | str | None) -> CategoryFilter:
        if isinstance(raw, CategoryFilter):
            return raw
        if raw is None or not str(raw).strip():
            return cls.ALL
        try:
            return cls(str(raw).strip().lower())
        except ValueError as e:
            choices = ", ".join(c.value for c in cls)
            raise FilterError(f"Unknown filter {raw!r}; expected one of: {choices}") from e


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    description: str
    priority: TaskPriority
    due_date: date
    status: TaskStatus
    created_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


@dataclass(slots=True)
class TaskDraft:
    """
    Caller input for create/update.

    Every field may be missing; TaskStore.validate_draft reports which ones are.
    due_date accepts a date or an ISO "YYYY-MM-DD" string.
    """

    title: str | None = None
    description: str | None = None
    priority: TaskPriority | str | None = TaskPriority.MEDIUM
    due_date: date | str | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            title=task.title,
            description=task.description,
            priority=task.priority,
            due_date=task.due_date,
        )


@dataclass(slots=True, frozen=True)
class NotificationLogEntry:
    timestamp: datetime
    message: str
    pending_count: int

    def format(self) -> str:
        return f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S')}] {self.message}"
