# src/tasktrack/tasks/task_scheduler.py

from __future__ import annotations

"""
Pending-task notification scheduler.

A small polling loop that:
- counts pending tasks,
- appends a NotificationLogEntry when there are any,
- logs what would have been emailed (no real delivery).

The loop scans once immediately and then every interval_seconds.
Cancel the asyncio task to stop it.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from ..core.ports import PendingTaskSource
from .task_models import NotificationLogEntry, TaskStatus

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = "Email notification: You have {count} pending task(s)"


def _now_local() -> datetime:
    return datetime.now().astimezone()


class NotificationLog:
    """Append-only, ordered notification history."""

    def __init__(self) -> None:
        self._entries: list[NotificationLogEntry] = []

    def append(self, entry: NotificationLogEntry) -> None:
        self._entries.append(entry)

    def entries(self) -> list[NotificationLogEntry]:
        return list(self._entries)

    def recent(self, n: int = 3) -> list[NotificationLogEntry]:
        if n <= 0:
            return []
        return self._entries[-n:]

    def clear(self) -> None:
        self._entries = []

    def __len__(self) -> int:
        return len(self._entries)


def scan_pending(
    source: PendingTaskSource,
    log: NotificationLog,
    *,
    now: datetime | None = None,
) -> NotificationLogEntry | None:
    """
    One scheduler tick.

    Returns the appended entry, or None when nothing is pending (no entry is written).
    Never raises.
    """
    try:
        count = int(source.count_by_status(TaskStatus.PENDING))
    except Exception:
        logger.exception("count_by_status failed; skipping notification scan")
        return None

    if count <= 0:
        logger.debug("Notification scan: no pending tasks")
        return None

    entry = NotificationLogEntry(
        timestamp=now or _now_local(),
        message=MESSAGE_TEMPLATE.format(count=count),
        pending_count=count,
    )
    log.append(entry)
    logger.info("%s", entry.format())
    return entry


async def run_notification_scheduler(
    source: PendingTaskSource,
    log: NotificationLog,
    *,
    interval_seconds: float = 1200.0,
    clock: Callable[[], datetime] = _now_local,
) -> None:
    """
    Scan immediately, then every interval_seconds.

    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        scan_pending(source, log, now=clock())
        await asyncio.sleep(sleep_s)


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class NotificationScheduler:
    """
    Idle/Running wrapper around run_notification_scheduler.

    start() needs a running event loop. stop() cancels the task synchronously:
    a cancelled task never performs another scan.
    """

    def __init__(
        self,
        source: PendingTaskSource,
        log: NotificationLog,
        *,
        interval_seconds: float = 1200.0,
    ) -> None:
        self._source = source
        self._log = log
        self._interval = float(interval_seconds)
        self._task: asyncio.Task[None] | None = None
        self._stopped: asyncio.Task[None] | None = None

    @property
    def state(self) -> SchedulerState:
        if self._task is not None and not self._task.done():
            return SchedulerState.RUNNING
        return SchedulerState.IDLE

    @property
    def running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def start(self) -> None:
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(
            run_notification_scheduler(self._source, self._log, interval_seconds=self._interval),
            name="notification-scheduler",
        )
        logger.info("Notification scheduler started (interval=%.1fs)", self._interval)

    def stop(self) -> asyncio.Task[None] | None:
        """Cancel the loop; returns the cancelled task so callers may await it."""
        task, self._task = self._task, None
        if task is None:
            return None
        if not task.done():
            task.cancel()
            logger.info("Notification scheduler stopped")
        self._stopped = task
        return task

    async def aclose(self) -> None:
        """Stop and wait until the cancelled loop task has actually finished."""
        self.stop()
        task, self._stopped = self._stopped, None
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task
