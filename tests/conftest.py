# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.core.session import SessionGate
from tasktrack.core.state import AppState
from tasktrack.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasktrack-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        console_enabled=False,
        # Short debounce so tests can wait it out; long interval so only the initial scan runs.
        search_debounce_ms=20,
        notify_interval_seconds=3600.0,
        notification_preview=3,
        clear_log_on_logout=False,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def gate(settings: SimpleNamespace) -> SessionGate:
    return SessionGate.from_settings(settings)


@pytest.fixture()
def state(settings: SimpleNamespace, gate: SessionGate) -> AppState:
    return AppState(settings=settings, gate=gate)
