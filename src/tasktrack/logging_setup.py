# src/tasktrack/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "tasktrack.log"

# Console thresholds by logger-name prefix; the longest matching prefix wins.
# The debouncer logs on every /search, so only its problems reach the console.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "tasktrack": logging.NOTSET,
    "tasktrack.core.debounce": logging.WARNING,
}
THIRD_PARTY_THRESHOLD = logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the REPL readable: app logs pass, everything else (py.warnings, asyncio) only at ERROR+."""

    def __init__(self, thresholds: dict[str, int] | None = None) -> None:
        super().__init__()
        # longest prefix first
        self._thresholds = sorted(
            (thresholds or CONSOLE_THRESHOLDS).items(), key=lambda kv: len(kv[0]), reverse=True
        )

    def threshold_for(self, name: str) -> int:
        for prefix, level in self._thresholds:
            if name == prefix or name.startswith(prefix + "."):
                return level
        return THIRD_PARTY_THRESHOLD

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold_for(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasktrack",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route everything to <log_dir>/tasktrack.log and a filtered copy to stderr.

    Replaces existing root handlers, so calling it again does not duplicate output.
    Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in (console, file_handler):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return log_file
