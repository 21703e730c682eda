# tests/test_commands.py

from __future__ import annotations

import asyncio

import pytest

from tasktrack.cli.commands import CommandRegistry, parse_draft, registry
from tasktrack.connectors.console_connector import handle_line
from tasktrack.core.errors import AuthError
from tasktrack.tasks.task_scheduler import scan_pending


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_parse_draft_splits_on_pipes() -> None:
    draft = parse_draft("Buy milk | semi skimmed | 2026-11-01 | high".split())
    assert draft.title == "Buy milk"
    assert draft.description == "semi skimmed"
    assert draft.due_date == "2026-11-01"
    assert draft.priority == "high"

    partial = parse_draft(["Buy", "milk"])
    assert partial.title == "Buy milk"
    assert partial.description is None and partial.due_date is None


def test_task_commands_need_login(state) -> None:
    with pytest.raises(AuthError):
        registry.handle(state, "/ls")
    assert handle_line(state, "/ls") == "Not logged in"
    assert handle_line(state, "/login nobody secret") == "Please enter a valid email"


@pytest.mark.asyncio
async def test_console_session_flow(state) -> None:
    notes: list[str] = []
    assert "Logged in as me@example.com" in (
        registry.handle(state, "/login me@example.com secret", emit=notes.append) or ""
    )
    assert notes and "reminders" in notes[0]

    assert "No tasks yet" in handle_line(state, "/ls")

    added = handle_line(state, "/add Buy milk | corner shop | 2026-11-01 | low")
    assert added.startswith("Task added:")
    handle_line(state, "/add Ship report | quarterly | 2026-11-05 | high")

    rejected = handle_line(state, "/add Only a title")
    assert "description: Description is required" in rejected
    assert "due date: Due date is required" in rejected

    store = state.gate.context.store
    milk, report = store.list_tasks()

    edited = handle_line(state, f"/edit {milk.id} | | 2026-12-24")
    assert edited.startswith("Task updated:")
    milk = store.get(milk.id)
    assert milk is not None
    assert milk.title == "Buy milk" and milk.due_date.isoformat() == "2026-12-24"
    assert milk.priority.value == "low"
    assert handle_line(state, "/edit 1 New | thing | 2026-12-01") == "Task #1 not found."

    assert "Marked as completed" in handle_line(state, f"/done {report.id}")
    assert handle_line(state, "/filter pending") == "Filter set to pending."
    listing = handle_line(state, "/ls")
    assert "Buy milk" in listing and "Ship report" not in listing

    handle_line(state, "/filter all")
    handle_line(state, "/search REPORT")
    await asyncio.sleep(0.1)
    listing = handle_line(state, "/ls")
    assert "Ship report" in listing and "Buy milk" not in listing

    handle_line(state, "/search zzz")
    await asyncio.sleep(0.1)
    assert "No tasks match your search criteria." in handle_line(state, "/ls")

    assert handle_line(state, "/rm 1") == "Task #1 not found."
    assert handle_line(state, f"/rm {milk.id}") == f"Task #{milk.id} deleted."

    assert "Logged out" in handle_line(state, "/logout")
    assert state.session is None
    assert store.count_tasks() == 0
    await state.gate.aclose()


@pytest.mark.asyncio
async def test_log_command_shows_recent_notifications(state) -> None:
    handle_line(state, "/login me@example.com secret")
    handle_line(state, "/add Buy milk | corner shop | 2026-11-01")

    assert handle_line(state, "/log") == "No notifications yet."

    ctx = state.gate.context
    for _ in range(5):
        scan_pending(ctx.store, ctx.notifications)

    lines = handle_line(state, "/log").splitlines()
    assert len(lines) == 3
    assert all("You have 1 pending task(s)" in line for line in lines)
    assert len(handle_line(state, "/log 5").splitlines()) == 5
    await state.gate.aclose()


@pytest.mark.asyncio
async def test_search_now_applies_without_waiting(state) -> None:
    handle_line(state, "/login me@example.com secret")
    handle_line(state, "/add Buy milk | corner shop | 2026-11-01")
    handle_line(state, "/add Ship report | quarterly | 2026-11-05")

    assert handle_line(state, "/search --now report") == "Searching for 'report'."
    search = state.gate.context.search
    assert search.debounced_term == "report"
    assert not search.settling

    listing = handle_line(state, "/ls")
    assert "Ship report" in listing and "Buy milk" not in listing
    assert "settling" not in listing

    assert handle_line(state, "/search --now") == "Search cleared."
    assert "Buy milk" in handle_line(state, "/ls")
    await state.gate.aclose()


@pytest.mark.asyncio
async def test_log_zero_shows_nothing(state) -> None:
    handle_line(state, "/login me@example.com secret")
    handle_line(state, "/add Buy milk | corner shop | 2026-11-01")
    ctx = state.gate.context
    scan_pending(ctx.store, ctx.notifications)

    assert handle_line(state, "/log 0") == "No notifications yet."
    assert len(handle_line(state, "/log").splitlines()) == 1
    await state.gate.aclose()
