"""releasegit logging: colored stderr lines and an optional JSON-lines file."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER_NAME = "releasegit"
LOG_FILE_NAME = "releasegit.log"

_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
_LOG_FILE_BACKUPS = 5

# Record attributes set through ``extra=`` that end up in JSON output
_EXTRA_FIELDS = ("command", "exit_code", "remote", "branch", "tag", "attempt")


def _short_name(record: logging.LogRecord) -> str:
    return record.name.removeprefix(f"{ROOT_LOGGER_NAME}.")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with git context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({key: getattr(record, key) for key in _EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL [git.sync] message`` with the level colored."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{color}{when} {record.levelname:8s}{self.RESET} [{_short_name(record)}] {record.getMessage()}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``releasegit`` root, e.g. ``get_logger("git.sync")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str = "info", log_dir: str | Path | None = None, json_output: bool = False) -> None:
    """Configure the ``releasegit`` logger tree.

    Replaces any handlers from an earlier call. Console output always goes
    to stderr so command output on stdout stays machine-readable.

    Args:
        level: Log level (debug, info, warn, error)
        log_dir: Directory for ``releasegit.log``; no file without it
        json_output: Write the log file as JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir and json_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / LOG_FILE_NAME,
            maxBytes=_LOG_FILE_MAX_BYTES,
            backupCount=_LOG_FILE_BACKUPS,
        )
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    root_logger.propagate = False
