# src/tasktrack/tasks/task_store.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime

from ..core.errors import NotFoundError, ValidationError
from .task_models import Task, TaskDraft, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "due_date": "Due date is required",
}
INVALID_DUE_DATE = "Due date must be a valid date (YYYY-MM-DD)"
INVALID_PRIORITY = "Priority must be one of: low, medium, high"


def _now_local() -> datetime:
    return datetime.now().astimezone()


def _parse_due_date(raw: date | str | None) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if raw is None:
        return None
    return date.fromisoformat(str(raw).strip())


class TaskStore:
    """
    In-memory task store.

    - Tasks are kept in insertion order; update/toggle replace in place.
    - Ids come from the wall clock in milliseconds and are bumped past the last
      issued id, so they are strictly increasing and never reused.
    - Every mutation builds the replacement Task first and swaps it in under the
      lock: a failed validation leaves the collection untouched.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _now_local) -> None:
        self._tasks: list[Task] = []
        self._lock = threading.Lock()
        self._clock = clock
        self._last_id = 0
        logger.info("TaskStore ready (in-memory)")

    # ---- low-level helpers ----

    def _next_id(self) -> int:
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _clean_draft(self, draft: TaskDraft) -> tuple[str, str, TaskPriority, date]:
        errors, cleaned = self._check_draft(draft)
        if cleaned is None:
            raise ValidationError(errors)
        return cleaned

    # ---- validation ----

    @staticmethod
    def _check_draft(
        draft: TaskDraft,
    ) -> tuple[dict[str, str], tuple[str, str, TaskPriority, date] | None]:
        """Field errors plus the trimmed/parsed values (None when any field failed)."""
        errors: dict[str, str] = {}

        title = (draft.title or "").strip()
        if not title:
            errors["title"] = REQUIRED_MESSAGES["title"]
        description = (draft.description or "").strip()
        if not description:
            errors["description"] = REQUIRED_MESSAGES["description"]

        due: date | None = None
        raw_due = draft.due_date
        if raw_due is None or (isinstance(raw_due, str) and not raw_due.strip()):
            errors["due_date"] = REQUIRED_MESSAGES["due_date"]
        else:
            try:
                due = _parse_due_date(raw_due)
            except ValueError:
                errors["due_date"] = INVALID_DUE_DATE

        priority = TaskPriority.parse(draft.priority)
        if priority is None:
            errors["priority"] = INVALID_PRIORITY

        if errors or due is None or priority is None:
            return errors, None
        return errors, (title, description, priority, due)

    @classmethod
    def validate_draft(cls, draft: TaskDraft) -> dict[str, str]:
        """
        Return field-keyed error messages for a draft (empty dict means valid).

        Required: title, description, due_date (non-empty after trimming).
        """
        return cls._check_draft(draft)[0]

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def count_by_status(self, status: TaskStatus) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if t.status == status)

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return None if idx is None else self._tasks[idx]

    def create(self, draft: TaskDraft) -> Task:
        title, description, priority, due = self._clean_draft(draft)

        with self._lock:
            task = Task(
                id=self._next_id(),
                title=title,
                description=description,
                priority=priority,
                due_date=due,
                status=TaskStatus.PENDING,
                created_at=self._clock(),
            )
            self._tasks.append(task)

        logger.debug(
            "Task added id=%s priority=%s due=%s", task.id, task.priority.value, task.due_date
        )
        return task

    def update(self, task_id: int, draft: TaskDraft) -> Task:
        """
        Replace the editable fields of an existing task.

        id, created_at and status always come from the stored record.
        Raises NotFoundError if task_id is unknown, ValidationError on a bad draft.
        """
        title, description, priority, due = self._clean_draft(draft)

        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                raise NotFoundError(task_id)

            new = replace(
                self._tasks[idx],
                title=title,
                description=description,
                priority=priority,
                due_date=due,
            )
            self._tasks[idx] = new

        logger.debug("Task updated id=%s", task_id)
        return new

    def delete(self, task_id: int) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return False
            del self._tasks[idx]

        logger.debug("Task deleted id=%s", task_id)
        return True

    def toggle_complete(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return None

            old = self._tasks[idx]
            new = replace(old, status=old.status.toggled())
            self._tasks[idx] = new

        logger.debug("Task %s -> %s", task_id, new.status.value)
        return new

    def clear(self) -> None:
        with self._lock:
            n = len(self._tasks)
            self._tasks = []
        logger.info("TaskStore cleared (%d tasks dropped)", n)
