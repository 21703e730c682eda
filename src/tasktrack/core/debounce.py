# src/tasktrack/core/debounce.py

from __future__ import annotations

"""
Debouncer.

Turns a rapidly changing input (search box keystrokes) into a stable value that
only updates after the input has been quiet for `delay_seconds`.

Runs on the asyncio event loop (loop.call_later), so `observe` must be called
from a coroutine or a loop callback.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    def __init__(
        self,
        delay_seconds: float,
        *,
        initial: T,
        on_settle: Callable[[T], None] | None = None,
    ) -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._value: T = initial
        self._on_settle = on_settle

        self._handle: asyncio.TimerHandle | None = None
        self._pending_value: T | None = None
        # Bumped on every observe/cancel; a timer only fires if it still holds the latest generation.
        self._generation = 0

    @property
    def value(self) -> T:
        return self._value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def delay_seconds(self) -> float:
        return self._delay

    def observe(self, value: T) -> None:
        """Record a new raw value and restart the quiet-period countdown."""
        loop = asyncio.get_running_loop()

        self._drop_handle()
        self._generation += 1
        self._pending_value = value
        self._handle = loop.call_later(self._delay, self._fire, self._generation)

    def flush(self) -> None:
        """Apply the pending value now (no-op when nothing is pending)."""
        if self._handle is None:
            return
        self._fire(self._generation)

    def cancel(self) -> None:
        """Drop any pending update without applying it."""
        self._drop_handle()
        self._generation += 1
        self._pending_value = None

    def reset(self, value: T) -> None:
        self.cancel()
        self._value = value

    def _drop_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            # Superseded by a newer observe() or cancelled.
            return

        self._drop_handle()
        value = self._pending_value
        self._pending_value = None
        self._value = value  # type: ignore[assignment]
        logger.debug("Debounced value settled: %r", value)

        if self._on_settle is not None:
            try:
                self._on_settle(self._value)
            except Exception:
                logger.exception("Debouncer on_settle callback failed")
