# src/tasktrack/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.errors import TaskTrackerError
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = ">>> "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    if sys.stdout.isatty():
        sys.stdout.write("\033[1A\033[2K\r")
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    else:
        print(line)


def handle_line(state: AppState, line: str) -> str:
    """Run one console line through the command registry and return the reply text."""
    try:
        reply = command_registry.handle(state, line, emit=_print_ts)
    except TaskTrackerError as e:
        return str(e)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if reply is None:
        return "Commands start with '/'. Use /help to list them."
    return reply


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL.

    stdin is read in a worker thread so the event loop keeps running the
    search debouncer and the notification scheduler between keystrokes.
    All commands execute on the loop thread.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /login <email> <password> to start, /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, PROMPT)).strip()
            _rewrite_prev_line(f"[{_ts_local()}] {PROMPT}{user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        _print_ts(handle_line(state, user_input))

    logger.info("Console connector finished.")
