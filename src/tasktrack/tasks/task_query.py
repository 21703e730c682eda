# src/tasktrack/tasks/task_query.py

from __future__ import annotations

"""
Query engine.

The visible task list is a pure function of (tasks, debounced search term,
category filter) and is recomputed from scratch on every read.
SearchState holds the ephemeral inputs and owns the search-term Debouncer.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.debounce import Debouncer
from .task_models import CategoryFilter, Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

EMPTY_STORE_MESSAGE = "No tasks yet. Create your first task with /add."
NO_MATCHES_MESSAGE = "No tasks match your search criteria."

_STATUS_FILTERS = {
    CategoryFilter.COMPLETED: TaskStatus.COMPLETED,
    CategoryFilter.PENDING: TaskStatus.PENDING,
}
_PRIORITY_FILTERS = {
    CategoryFilter.LOW: TaskPriority.LOW,
    CategoryFilter.MEDIUM: TaskPriority.MEDIUM,
    CategoryFilter.HIGH: TaskPriority.HIGH,
}


@dataclass(slots=True, frozen=True)
class VisibleTasks:
    """Filtered tasks plus the store size, so callers can tell "empty" from "no match"."""

    items: tuple[Task, ...]
    total: int

    @property
    def store_is_empty(self) -> bool:
        return self.total == 0

    @property
    def has_no_matches(self) -> bool:
        return self.total > 0 and not self.items

    def empty_message(self) -> str | None:
        if self.store_is_empty:
            return EMPTY_STORE_MESSAGE
        if self.has_no_matches:
            return NO_MATCHES_MESSAGE
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def matches_category(task: Task, category: CategoryFilter) -> bool:
    if category == CategoryFilter.ALL:
        return True
    if category in _STATUS_FILTERS:
        return task.status == _STATUS_FILTERS[category]
    return task.priority == _PRIORITY_FILTERS[category]


def visible_tasks(
    tasks: Iterable[Task],
    search_term: str = "",
    category: CategoryFilter | str | None = CategoryFilter.ALL,
) -> VisibleTasks:
    """Filter tasks by text and category, keeping store order."""
    cat = CategoryFilter.parse(category)
    all_tasks = list(tasks)
    items = tuple(t for t in all_tasks if matches_search(t, search_term) and matches_category(t, cat))
    return VisibleTasks(items=items, total=len(all_tasks))


class SearchState:
    """
    Ephemeral search/filter inputs for one session.

    raw_term follows every update; debounced_term lags it by the configured delay.
    """

    def __init__(self, *, debounce_seconds: float = 0.5) -> None:
        self.raw_term = ""
        self.category = CategoryFilter.ALL
        self._debouncer: Debouncer[str] = Debouncer(
            debounce_seconds, initial="", on_settle=self._on_settle
        )

    @property
    def debounced_term(self) -> str:
        return self._debouncer.value

    @property
    def settling(self) -> bool:
        return self._debouncer.pending

    def set_term(self, term: str) -> None:
        self.raw_term = term
        self._debouncer.observe(term)

    def set_category(self, category: CategoryFilter | str) -> CategoryFilter:
        self.category = CategoryFilter.parse(category)
        return self.category

    def flush(self) -> None:
        self._debouncer.flush()

    def view(self, tasks: Iterable[Task]) -> VisibleTasks:
        return visible_tasks(tasks, self.debounced_term, self.category)

    def reset(self) -> None:
        self.raw_term = ""
        self.category = CategoryFilter.ALL
        self._debouncer.reset("")

    def close(self) -> None:
        self._debouncer.cancel()

    @staticmethod
    def _on_settle(term: str) -> None:
        logger.debug("Search term settled: %r", term)
