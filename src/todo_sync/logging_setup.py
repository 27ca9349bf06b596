# src/todo_sync/logging_setup.py

"""
Logging for the console app.

The console shows what the user acted on (command results, sync summaries);
the log file under the data dir keeps everything, including every failed
remote call and the ids of orphaned documents.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Longest matching prefix wins; loggers not listed fall back to "".
CONSOLE_MIN_LEVELS: dict[str, int] = {
    "todo_sync": logging.DEBUG,
    "todo_sync.remote": logging.WARNING,
    "httpx": logging.ERROR,
    "httpcore": logging.ERROR,
    "": logging.ERROR,
}


class ConsoleLevelFilter(logging.Filter):
    """Per-logger minimum level for the console handler."""

    def __init__(self, levels: dict[str, int] | None = None) -> None:
        super().__init__()
        self._levels = sorted((levels or CONSOLE_MIN_LEVELS).items(), key=lambda kv: len(kv[0]), reverse=True)

    def min_level(self, name: str) -> int:
        for prefix, level in self._levels:
            if not prefix or name == prefix or name.startswith(prefix + "."):
                return level
        return logging.ERROR

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.min_level(record.name)


def parse_level(name: str | None, default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / '10' -> logging level; anything else -> default."""
    raw = (name or "").strip().upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def setup_logging(settings, *, max_bytes: int = 1_000_000, backups: int = 3) -> Path:
    """
    Install the console and file handlers on the root logger.

    Replaces any handlers already on the root logger.
    Returns the log file path.
    """
    log_dir = Path(settings.data_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{settings.app_name}.log"

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(getattr(settings, "log_level", None)))
    console.setFormatter(formatter)
    console.addFilter(ConsoleLevelFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    # httpx logs one INFO line per request; keep those in the file only.
    logging.getLogger("httpx").setLevel(logging.INFO)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
