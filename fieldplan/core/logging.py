"""Structured JSON logging for fieldplan.

Every module logs through ``get_logger(__name__)``, which nests it under
the ``fieldplan`` root logger. Structured fields go in
``extra={"context": {...}}``; the keys in use are:

    - kind, rows, kept, dropped: one line per normalized import batch
    - path, rows, count: export files read and written
    - prospects, accounts, logs, changed: reconciliation runs
    - company, outcome: a visit logged by hand
    - candidates, stops, anchor, city, date: the day plan summary
    - error: failures surfaced by the CLI

The file log (``fieldplan.log``) holds one JSON object per line and
rotates at 10 MB. The console shows ``HH:MM:SS LEVL module: message
[key=value, ...]`` with the module name relative to the package.

Usage:
    from fieldplan.core.logging import get_logger, setup_logging

    setup_logging(log_dir=config.log_path)  # once, from the CLI
    logger = get_logger(__name__)

    logger.info("Plan built", extra={"context": {"stops": 12, "anchor": "Acme Co"}})
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

ROOT_LOGGER_NAME = "fieldplan"
LOG_FILE_NAME = "fieldplan.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _module_name(name: str) -> str:
    """Strip the package prefix from a logger name."""
    prefix = f"{ROOT_LOGGER_NAME}."
    return name[len(prefix):] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """One JSON object per record for the file log.

    Dates and other non-JSON context values are written with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Short human-readable lines for the terminal."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        message = record.getMessage()

        context = getattr(record, "context", None)
        if context:
            message += " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"

        return f"{timestamp} {record.levelname[:4]:4s} {_module_name(record.name)}: {message}"


_logging_initialized = False


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Optional[Path]:
    """Attach console and rotating JSON file handlers to the fieldplan root.

    Only the first call configures anything.

    Args:
        log_dir: Directory for the log file. Defaults to ~/.fieldplan/logs
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)

    Returns:
        Path of the log file, or None if logging was already set up
    """
    global _logging_initialized

    if _logging_initialized:
        return None

    if log_dir is None:
        log_dir = Path.home() / ".fieldplan" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    log_file = log_dir / LOG_FILE_NAME
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    root_logger.info("Logging initialized", extra={"context": {"path": str(log_file)}})
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under the fieldplan root.

    ``get_logger(__name__)`` and ``get_logger("engine.planner")`` name
    the same logger.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{_module_name(name)}")
