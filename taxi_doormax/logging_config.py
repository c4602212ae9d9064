"""
Logging setup for exploration runs.

Console output is colored and compact; with a log directory, the same records
also go to two rotating files:

- ``doormax.log``: the console format without colors
- ``doormax.json.log``: one JSON object per record, carrying the learner
  context (subsystem, action, attribute, event) and any ``extra_data``

Learner modules keep using ``logging.getLogger(__name__)`` and attach context
through ``extra=``; nothing here is required for them to log.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Union

# Record attributes that describe which rule set a record is about.
CONTEXT_FIELDS = ("subsystem", "action", "attribute", "event_type")

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
COLOR_RESET = "\033[0m"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def record_context(record: logging.LogRecord) -> Dict[str, str]:
    """Context fields set on ``record``, rendered as strings."""
    context = {}
    for name in CONTEXT_FIELDS:
        value = getattr(record, name, None)
        if value is not None and value != "general":
            context[name] = str(value)
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        if "event_type" in context:
            context["event"] = context.pop("event_type")
        payload.update(context)

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload.update(extra_data)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """``HH:MM:SS.mmm LEVL [subsystem] action=.. attr=..: message``"""

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        parts = [stamp, record.levelname[:4]]

        context = record_context(record)
        if "subsystem" in context:
            parts.append(f"[{context['subsystem']}]")
        if "action" in context:
            parts.append(f"action={context['action']}")
        if "attribute" in context:
            parts.append(f"attr={context['attribute']}")

        text = " ".join(parts) + ": " + record.getMessage()
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)

        color = LEVEL_COLORS.get(record.levelno)
        if self.use_colors and color and sys.stderr.isatty():
            text = color + text + COLOR_RESET
        return text


class StructuredLogger(logging.Logger):
    """Logger with a shorthand for learner events."""

    def event(
        self,
        event_type: str,
        msg: str,
        subsystem: str = "general",
        action: Optional[Any] = None,
        attribute: Optional[str] = None,
        level: int = logging.INFO,
        **data,
    ) -> None:
        """Log ``msg`` tagged with ``event_type``; keyword data goes to ``extra_data``."""
        if self.isEnabledFor(level):
            self.log(level, msg, extra={
                "subsystem": subsystem,
                "action": action,
                "attribute": attribute,
                "event_type": event_type,
                "extra_data": data,
            })


def _rotating_handler(
    path: str,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: Union[str, int] = "INFO",
    log_dir: Optional[str] = None,
    json_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Replace the root handlers with the console handler and, if ``log_dir``
    is given, the two rotating file handlers.

    Args:
        level: Level name (one of LOG_LEVELS) or number
        log_dir: Directory for the log files, created if missing
        json_file: JSON log file name; relative names go under ``log_dir``
        max_bytes: Rotation size of each file
        backup_count: Rotated files kept per log

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if isinstance(level, str):
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {level!r}")
        level = getattr(logging, level.upper())

    logging.setLoggerClass(StructuredLogger)
    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root.handlers = [console]

    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)
    json_path = json_file or "doormax.json.log"
    if not os.path.isabs(json_path):
        json_path = os.path.join(log_dir, json_path)

    root.addHandler(_rotating_handler(
        os.path.join(log_dir, "doormax.log"),
        HumanFormatter(use_colors=False),
        max_bytes,
        backup_count,
    ))
    root.addHandler(_rotating_handler(json_path, JSONFormatter(), max_bytes, backup_count))


def get_logger(name: str) -> StructuredLogger:
    """``logging.getLogger`` typed as a StructuredLogger (after ``configure_logging``)."""
    return logging.getLogger(name)  # type: ignore
