# src/tasktrack/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..tasks.task_query import SearchState
from ..tasks.task_scheduler import NotificationLog, NotificationScheduler
from ..tasks.task_store import TaskStore

if TYPE_CHECKING:
    from .session import SessionGate


@dataclass(slots=True, frozen=True)
class Session:
    identity: str
    token: str
    started_at: datetime


@dataclass(slots=True)
class SessionContext:
    """
    All mutable state that belongs to the signed-in user.

    Passed explicitly to operations instead of living in module globals,
    so tests (or a future multi-session host) can run several side by side.
    """

    store: TaskStore
    search: SearchState
    notifications: NotificationLog
    scheduler: NotificationScheduler

    @classmethod
    def create(
        cls,
        *,
        search_debounce_seconds: float = 0.5,
        notify_interval_seconds: float = 1200.0,
        store: TaskStore | None = None,
    ) -> SessionContext:
        store = store if store is not None else TaskStore()
        log = NotificationLog()
        return cls(
            store=store,
            search=SearchState(debounce_seconds=search_debounce_seconds),
            notifications=log,
            scheduler=NotificationScheduler(store, log, interval_seconds=notify_interval_seconds),
        )


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any
    gate: SessionGate
    session: Session | None = None
