# src/tasktrack/tasks/task_api.py

from __future__ import annotations

"""
Boundary operations a host (console, HTTP layer, tests) calls.

Every call takes the gate and the caller's Session and raises AuthError when
that session is not the active one. ValidationError and NotFound are returned
in a TaskResult instead of raised, so the caller can render them field by field.
"""

import logging
from dataclasses import dataclass, field

from ..core.errors import NotFoundError, ValidationError
from ..core.session import SessionGate
from ..core.state import Session
from .task_models import CategoryFilter, NotificationLogEntry, Task, TaskDraft
from .task_query import VisibleTasks, visible_tasks

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TaskResult:
    task: Task | None = None
    errors: dict[str, str] = field(default_factory=dict)
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors and not self.not_found


def login(gate: SessionGate, email: str | None, password: str | None) -> Session:
    return gate.login(email, password)


def logout(gate: SessionGate, session: Session | None) -> None:
    gate.require(session)
    gate.logout()


def list_visible_tasks(
    gate: SessionGate,
    session: Session | None,
    search_term: str | None = None,
    category: CategoryFilter | str | None = None,
) -> VisibleTasks:
    """
    Tasks matching a search term and category.

    With neither given, the session's own SearchState (debounced term and
    current filter) decides. Raises FilterError for an unknown category.
    """
    ctx = gate.require(session)
    tasks = ctx.store.list_tasks()
    if search_term is None and category is None:
        return ctx.search.view(tasks)
    return visible_tasks(tasks, search_term or "", category)


def create_task(gate: SessionGate, session: Session | None, draft: TaskDraft) -> TaskResult:
    ctx = gate.require(session)
    try:
        task = ctx.store.create(draft)
    except ValidationError as e:
        logger.debug("create_task rejected: %s", e.errors)
        return TaskResult(errors=e.errors)
    logger.info("Task created id=%s title=%r", task.id, task.title)
    return TaskResult(task=task)


def update_task(
    gate: SessionGate, session: Session | None, task_id: int, draft: TaskDraft
) -> TaskResult:
    ctx = gate.require(session)
    try:
        task = ctx.store.update(task_id, draft)
    except ValidationError as e:
        logger.debug("update_task rejected id=%s: %s", task_id, e.errors)
        return TaskResult(errors=e.errors)
    except NotFoundError:
        logger.warning("update_task: task %s not found", task_id)
        return TaskResult(not_found=True)
    logger.info("Task updated id=%s", task.id)
    return TaskResult(task=task)


def delete_task(gate: SessionGate, session: Session | None, task_id: int) -> TaskResult:
    ctx = gate.require(session)
    if not ctx.store.delete(task_id):
        logger.info("delete_task: task %s not found (no-op)", task_id)
        return TaskResult(not_found=True)
    logger.info("Task deleted id=%s", task_id)
    return TaskResult()


def toggle_task_complete(gate: SessionGate, session: Session | None, task_id: int) -> TaskResult:
    ctx = gate.require(session)
    task = ctx.store.toggle_complete(task_id)
    if task is None:
        logger.info("toggle_task_complete: task %s not found (no-op)", task_id)
        return TaskResult(not_found=True)
    logger.info("Task %s -> %s", task.id, task.status.value)
    return TaskResult(task=task)


def get_notification_log(
    gate: SessionGate, session: Session | None, limit: int | None = None
) -> list[NotificationLogEntry]:
    """The whole log, or only the last `limit` entries."""
    ctx = gate.require(session)
    if limit is None:
        return ctx.notifications.entries()
    return ctx.notifications.recent(limit)
