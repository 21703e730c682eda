# src/tasktrack/core/session.py

from __future__ import annotations

"""
Session gate.

Anonymous -> Authenticated on login(), back on logout().
Every task operation goes through require(), which rejects calls made
without the currently active session.

Logout policy: the task collection is wiped ("fresh slate per session") and
the notification scheduler is stopped. The notification log survives unless
clear_log_on_logout is set.
"""

import logging
import secrets
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import AuthError
from .state import Session, SessionContext

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Please enter both email and password"
INVALID_EMAIL = "Please enter a valid email"
NOT_LOGGED_IN = "Not logged in"


class GateState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


def check_credentials(email: str | None, password: str | None) -> str:
    """Return the cleaned email or raise AuthError (presence/format check only)."""
    email = (email or "").strip()
    if not email or not (password or "").strip():
        raise AuthError(MISSING_CREDENTIALS)
    if "@" not in email:
        raise AuthError(INVALID_EMAIL)
    return email


class SessionGate:
    def __init__(
        self,
        context: SessionContext | None = None,
        *,
        clear_log_on_logout: bool = False,
    ) -> None:
        self.context = context if context is not None else SessionContext.create()
        self.clear_log_on_logout = clear_log_on_logout
        self._session: Session | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> SessionGate:
        debounce_ms = int(getattr(settings, "search_debounce_ms", 500))
        context = SessionContext.create(
            search_debounce_seconds=max(0, debounce_ms) / 1000.0,
            notify_interval_seconds=float(getattr(settings, "notify_interval_seconds", 1200.0)),
        )
        return cls(
            context,
            clear_log_on_logout=bool(getattr(settings, "clear_log_on_logout", False)),
        )

    @property
    def state(self) -> GateState:
        return GateState.AUTHENTICATED if self._session is not None else GateState.ANONYMOUS

    @property
    def session(self) -> Session | None:
        return self._session

    def login(self, email: str | None, password: str | None) -> Session:
        """
        Validate credentials, open a session and start the notification scheduler.

        Must be called with a running event loop (the scheduler is an asyncio task).
        If the scheduler cannot start, the gate stays anonymous.
        """
        identity = check_credentials(email, password)

        if self._session is not None:
            logger.info("Login while authenticated; closing previous session first")
            self.logout()

        session = Session(
            identity=identity,
            token=secrets.token_urlsafe(24),
            started_at=datetime.now().astimezone(),
        )
        self.context.scheduler.start()
        self._session = session
        logger.info("Session started for %s", identity)
        return session

    def logout(self) -> None:
        if self._session is None:
            return

        identity = self._session.identity
        self._session = None

        ctx = self.context
        ctx.scheduler.stop()
        ctx.search.reset()
        ctx.store.clear()
        if self.clear_log_on_logout:
            ctx.notifications.clear()

        logger.info("Session ended for %s", identity)

    def require(self, session: Session | None) -> SessionContext:
        """Return the session context, or raise AuthError if session is not the active one."""
        active = self._session
        if active is None or session is None or not secrets.compare_digest(session.token, active.token):
            raise AuthError(NOT_LOGGED_IN)
        return self.context

    async def aclose(self) -> None:
        """Process teardown: log out and wait for the scheduler task to finish cancelling."""
        await self.context.scheduler.aclose()
        self.logout()
        self.context.search.close()
