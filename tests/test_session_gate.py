# tests/test_session_gate.py

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from tasktrack.core.errors import AuthError
from tasktrack.core.session import (
    INVALID_EMAIL,
    MISSING_CREDENTIALS,
    NOT_LOGGED_IN,
    GateState,
    SessionGate,
)
from tasktrack.tasks.task_scheduler import SchedulerState, scan_pending

from .fakes import make_draft


@pytest.mark.parametrize(
    ("email", "password", "message"),
    [
        ("", "secret", MISSING_CREDENTIALS),
        ("me@example.com", "", MISSING_CREDENTIALS),
        (None, None, MISSING_CREDENTIALS),
        ("me.example.com", "secret", INVALID_EMAIL),
    ],
)
def test_login_rejects_bad_credentials(gate: SessionGate, email, password, message: str) -> None:
    with pytest.raises(AuthError) as exc:
        gate.login(email, password)

    assert exc.value.message == message
    assert gate.state == GateState.ANONYMOUS
    assert gate.context.scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_login_starts_scheduler_and_logout_stops_it(gate: SessionGate) -> None:
    session = gate.login("  me@example.com ", "secret")

    assert session.identity == "me@example.com"
    assert session.token
    assert gate.state == GateState.AUTHENTICATED
    assert gate.require(session) is gate.context
    assert gate.context.scheduler.running

    gate.logout()

    assert gate.state == GateState.ANONYMOUS
    assert not gate.context.scheduler.running
    await gate.aclose()


@pytest.mark.asyncio
async def test_logout_then_login_starts_with_empty_store(gate: SessionGate) -> None:
    gate.login("me@example.com", "secret")
    for i in range(3):
        gate.context.store.create(make_draft(title=f"t{i}"))

    gate.logout()
    session = gate.login("me@example.com", "secret")

    assert gate.require(session).store.count_tasks() == 0
    await gate.aclose()


@pytest.mark.asyncio
async def test_notification_log_survives_logout_by_default(gate: SessionGate) -> None:
    gate.login("me@example.com", "secret")
    ctx = gate.context
    ctx.store.create(make_draft())
    scan_pending(ctx.store, ctx.notifications)

    gate.logout()
    gate.login("me@example.com", "secret")

    assert [e.pending_count for e in ctx.notifications.entries()] == [1]
    await gate.aclose()


@pytest.mark.asyncio
async def test_notification_log_cleared_on_logout_when_configured(settings: SimpleNamespace) -> None:
    settings.clear_log_on_logout = True
    gate = SessionGate.from_settings(settings)
    gate.login("me@example.com", "secret")
    ctx = gate.context
    ctx.store.create(make_draft())
    scan_pending(ctx.store, ctx.notifications)

    gate.logout()

    assert len(ctx.notifications) == 0
    await gate.aclose()


@pytest.mark.asyncio
async def test_require_rejects_stale_or_missing_session(gate: SessionGate) -> None:
    old = gate.login("me@example.com", "secret")
    new = gate.login("other@example.com", "secret")

    assert gate.require(new) is gate.context
    with pytest.raises(AuthError) as exc:
        gate.require(old)
    assert exc.value.message == NOT_LOGGED_IN

    with pytest.raises(AuthError):
        gate.require(None)

    gate.logout()
    with pytest.raises(AuthError):
        gate.require(new)
    await gate.aclose()


@pytest.mark.asyncio
async def test_no_notifications_after_logout(settings: SimpleNamespace) -> None:
    settings.notify_interval_seconds = 0.02
    gate = SessionGate.from_settings(settings)
    gate.login("me@example.com", "secret")
    await asyncio.sleep(0.01)

    gate.logout()
    # Tasks added directly to the store after logout must not be picked up.
    gate.context.store.create(make_draft())
    await asyncio.sleep(0.1)

    assert len(gate.context.notifications) == 0
    await gate.aclose()


def test_login_without_event_loop_leaves_gate_anonymous(gate: SessionGate) -> None:
    with pytest.raises(RuntimeError):
        gate.login("me@example.com", "secret")

    assert gate.state == GateState.ANONYMOUS
    assert gate.session is None
    assert gate.context.scheduler.state == SchedulerState.IDLE
    with pytest.raises(AuthError):
        gate.require(None)
