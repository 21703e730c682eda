# src/tasktrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every timing knob (debounce delay, notification interval) is configurable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTRACK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Search ----
    search_debounce_ms: int

    # ---- Notifications ----
    notify_interval_seconds: float
    notification_preview: int
    clear_log_on_logout: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktrack") or "tasktrack"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktrack"))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        search_debounce_ms = _env_int(_k("SEARCH_DEBOUNCE_MS"), 500)

        # Production cadence is 20 minutes; shorten it for demos.
        notify_interval_seconds = _env_float(_k("NOTIFY_INTERVAL_SECONDS"), 20 * 60.0)
        notification_preview = _env_int(_k("NOTIFICATION_PREVIEW"), 3)
        clear_log_on_logout = _env_bool(_k("CLEAR_LOG_ON_LOGOUT"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            console_enabled=console_enabled,
            search_debounce_ms=search_debounce_ms,
            notify_interval_seconds=notify_interval_seconds,
            notification_preview=notification_preview,
            clear_log_on_logout=clear_log_on_logout,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
