# src/tasktrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The notification scheduler depends on Protocols instead of the concrete
TaskStore, which keeps it testable with small in-memory fakes.
"""

from typing import Any, Protocol


class PendingTaskSource(Protocol):
    """What the notification scheduler needs to read."""

    def count_by_status(self, status: Any) -> int: ...

