# src/tasktrack/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import CategoryFilter, NotificationLogEntry, Task, TaskDraft
from ..tasks.task_api import TaskResult

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "title": "title",
    "description": "description",
    "due_date": "due date",
    "priority": "priority",
}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting helpers ----


def format_task(task: Task) -> str:
    mark = "x" if task.is_completed else " "
    return (
        f"#{task.id} [{mark}] {task.title} "
        f"({task.priority.value}, due {task.due_date.isoformat()})\n"
        f"    {task.description}"
    )


def format_errors(errors: dict[str, str]) -> str:
    lines = ["Task not saved:"]
    for key in ("title", "description", "due_date", "priority"):
        if key in errors:
            lines.append(f"  {FIELD_LABELS[key]}: {errors[key]}")
    return "\n".join(lines)


def format_log_entries(entries: list[NotificationLogEntry]) -> str:
    if not entries:
        return "No notifications yet."
    return "\n".join(e.format() for e in entries)


def parse_draft(args: list[str]) -> TaskDraft:
    """'title | description | YYYY-MM-DD [| priority]' -> TaskDraft (missing parts stay None)."""
    parts = [p.strip() for p in " ".join(args).split("|")]
    parts += [""] * (4 - len(parts))
    title, description, due, priority = parts[:4]
    return TaskDraft(
        title=title or None,
        description=description or None,
        due_date=due or None,
        priority=priority or None,
    )


def parse_task_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _result_reply(result: TaskResult, task_id: int | None, done: str) -> str:
    if result.not_found:
        return f"Task #{task_id} not found."
    if result.errors:
        return format_errors(result.errors)
    if result.task is not None:
        return f"{done}\n{format_task(result.task)}"
    return done


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    gate = state.gate
    ctx = gate.context
    who = gate.session.identity if gate.session else "-"
    search = ctx.search
    return (
        "Status:\n"
        f"  Session: {gate.state.value} ({who})\n"
        f"  Tasks: {ctx.store.count_tasks()}\n"
        f"  Search: {search.debounced_term!r} filter={search.category.value}\n"
        f"  Notifications: {ctx.scheduler.state.value}, every {ctx.scheduler.interval_seconds:.0f}s, "
        f"{len(ctx.notifications)} logged"
    )


def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/login <email> <password>"""
    email = args[0] if args else None
    password = " ".join(args[1:]) if len(args) > 1 else None
    state.session = task_api.login(state.gate, email, password)
    if emit is not None:
        interval = state.gate.context.scheduler.interval_seconds
        emit(f"Pending-task reminders every {interval / 60:.0f} min.")
    return f"Logged in as {state.session.identity}."


def cmd_logout(state: AppState, args: list[str]) -> str:
    task_api.logout(state.gate, state.session)
    state.session = None
    return "Logged out. Your task list has been cleared."


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add title | description | YYYY-MM-DD [| low|medium|high]"""
    result = task_api.create_task(state.gate, state.session, parse_draft(args))
    return _result_reply(result, None, "Task added:")


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> title | description | YYYY-MM-DD [| priority]

    Empty parts keep the task's current value: "/edit 17 | | 2026-12-01" only moves the due date.
    """
    task_id = parse_task_id(args)
    if task_id is None:
        return "Usage: /edit <id> title | description | YYYY-MM-DD [| priority]"

    draft = parse_draft(args[1:])
    current = state.gate.require(state.session).store.get(task_id)
    if current is not None:
        base = TaskDraft.from_task(current)
        draft = TaskDraft(
            title=draft.title or base.title,
            description=draft.description or base.description,
            due_date=draft.due_date or base.due_date,
            priority=draft.priority or base.priority,
        )
    result = task_api.update_task(state.gate, state.session, task_id, draft)
    return _result_reply(result, task_id, "Task updated:")


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = parse_task_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    result = task_api.toggle_task_complete(state.gate, state.session, task_id)
    if result.task is not None:
        label = "completed" if result.task.is_completed else "pending"
        return _result_reply(result, task_id, f"Marked as {label}:")
    return _result_reply(result, task_id, "")


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = parse_task_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    result = task_api.delete_task(state.gate, state.session, task_id)
    return _result_reply(result, task_id, f"Task #{task_id} deleted.")


def cmd_ls(state: AppState, args: list[str]) -> str:
    view = task_api.list_visible_tasks(state.gate, state.session)
    search = state.gate.context.search
    header = f"Tasks ({len(view)} of {view.total}, filter={search.category.value}"
    if search.debounced_term:
        header += f", search={search.debounced_term!r}"
    header += ")"
    if search.settling:
        header += " [search still settling]"

    msg = view.empty_message()
    if msg is not None:
        return f"{header}\n{msg}"
    return "\n".join([header, *(format_task(t) for t in view)])


def cmd_search(state: AppState, args: list[str]) -> str:
    """/search [--now] [term] -- empty term clears the search, --now skips the delay."""
    ctx = state.gate.require(state.session)
    now = bool(args) and args[0] == "--now"
    term = " ".join(args[1:] if now else args).strip()
    ctx.search.set_term(term)
    if now:
        ctx.search.flush()
        return "Search cleared." if not term else f"Searching for {term!r}."
    delay_ms = int(getattr(state.settings, "search_debounce_ms", 500))
    if not term:
        return f"Search cleared (applies after {delay_ms} ms)."
    return f"Searching for {term!r} (applies after {delay_ms} ms)."


def cmd_filter(state: AppState, args: list[str]) -> str:
    ctx = state.gate.require(state.session)
    choices = ", ".join(c.value for c in CategoryFilter)
    if not args:
        return f"Filter: {ctx.search.category.value}. Choose one of: {choices}."
    try:
        category = ctx.search.set_category(args[0])
    except ValueError:
        return f"Unknown filter {args[0]!r}. Choose one of: {choices}."
    return f"Filter set to {category.value}."


def cmd_log(state: AppState, args: list[str]) -> str:
    """/log [n] -- last n notifications (default from settings)."""
    n = int(getattr(state.settings, "notification_preview", 3))
    if args:
        try:
            n = max(0, int(args[0]))
        except ValueError:
            return "Usage: /log [n]"
    return format_log_entries(task_api.get_notification_log(state.gate, state.session, limit=n))


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session, task and notification status.")
registry.register("login", cmd_login, help_text="Sign in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Sign out (clears your task list).")
registry.register(
    "add", cmd_add, help_text="Add a task: /add title | description | YYYY-MM-DD [| priority]."
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit a task: /edit <id> title | description | YYYY-MM-DD [| priority].",
)
registry.register("done", cmd_done, help_text="Toggle completed/pending: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("ls", cmd_ls, help_text="List tasks matching the current search and filter.", aliases=["list"])
registry.register("search", cmd_search, help_text="Search title/description: /search [--now] [term].")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter all|completed|pending|low|medium|high."
)
registry.register("log", cmd_log, help_text="Show recent notifications: /log [n].")
