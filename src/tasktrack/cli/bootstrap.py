# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the session gate (store, search state, notification scheduler) into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.session import SessionGate
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    gate = SessionGate.from_settings(settings)
    logger.debug(
        "State created (debounce=%sms, notify_interval=%ss, clear_log_on_logout=%s)",
        settings.search_debounce_ms,
        settings.notify_interval_seconds,
        settings.clear_log_on_logout,
    )
    return AppState(settings=settings, gate=gate)


async def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.gate.aclose()
    except Exception:
        logger.exception("Failed to close session gate.")
    state.session = None
