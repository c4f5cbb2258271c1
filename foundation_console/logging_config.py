"""
Foundation Console - Structured Logging Configuration
=====================================================
Provides JSON-formatted structured logging with session context.

Features:
- JSON output for log aggregation
- Session-scoped context (page, user_id, session_id)
- Performance tracking (duration_ms) for backend calls
- Log level filtering via environment

Usage:
    from foundation_console.logging_config import configure_logging, log_event

    configure_logging()
    log_event("vote_cast", contest_id="c1", contestant_id="p1")
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
import time
import traceback
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from foundation_console.config import get_settings

SERVICE_NAME = "foundation-console"


class LogLevel(str, Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# Context (Streamlit runs each script rerun on its own thread)
# =============================================================================


class LogContext:
    """Thread-local storage for session-scoped log context."""

    _local = threading.local()
    _fields = ("page", "user_id", "session_id")

    @classmethod
    def set(cls, **values: str | None) -> None:
        for key, value in values.items():
            if key not in cls._fields:
                raise KeyError(f"Unknown log context field: {key}")
            setattr(cls._local, key, value)

    @classmethod
    def get(cls, key: str) -> str | None:
        return getattr(cls._local, key, None)

    @classmethod
    def clear(cls) -> None:
        for key in cls._fields:
            setattr(cls._local, key, None)

    @classmethod
    def get_all(cls) -> dict[str, Any]:
        return {key: cls.get(key) for key in cls._fields}


# =============================================================================
# JSON Formatter
# =============================================================================


_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname",
        "filename", "module", "lineno", "funcName", "created", "msecs",
        "relativeCreated", "thread", "threadName", "processName",
        "process", "getMessage", "exc_info", "exc_text", "stack_info",
        "taskName", "message",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per line with timestamp, level, logger, message,
    service name, source location and any ``extra=`` fields.
    """

    def __init__(
        self,
        *,
        service_name: str = SERVICE_NAME,
        include_extra_fields: bool = True,
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.include_extra_fields = include_extra_fields
        self._iso_format = "%Y-%m-%dT%H:%M:%S.%fZ"

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        if record.pathname:
            log_entry["file"] = Path(record.pathname).name
            log_entry["line"] = record.lineno
            log_entry["function"] = record.funcName

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": "".join(traceback.format_exception(*record.exc_info)),
            }

        for key, value in LogContext.get_all().items():
            if value is not None:
                log_entry[key] = value

        if self.include_extra_fields:
            for key, value in record.__dict__.items():
                if key not in _STANDARD_ATTRS and not key.startswith("_"):
                    log_entry[key] = value

        return json.dumps(log_entry, default=self._json_serializer, ensure_ascii=False)

    def _format_timestamp(self, created: float) -> str:
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime(self._iso_format)

    @staticmethod
    def _json_serializer(obj: Any) -> str:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


# =============================================================================
# Console Formatter (human-readable)
# =============================================================================


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for local development."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.LEVEL_COLORS.get(record.levelname, "")
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        page = LogContext.get("page") or "-"

        base = (
            f"{level_color}{record.levelname:<8}{self.RESET} "
            f"{timestamp} "
            f"[{page}] "
            f"{record.name}: "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return base


# =============================================================================
# Configuration
# =============================================================================


def _convert_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _get_log_level() -> int:
    return _convert_level(os.environ.get("LOG_LEVEL", "INFO"))


def _should_use_json() -> bool:
    log_format = os.environ.get("LOG_FORMAT", "").lower()
    if log_format == "console":
        return False
    if log_format == "json":
        return True
    # JSON in production, console in debug
    return not get_settings().debug_mode


_configured = False


def configure_logging(
    *,
    level: str | int | None = None,
    log_format: str | None = None,
    stream: Any = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name or constant; defaults to ``LOG_LEVEL``.
        log_format: ``"json"`` or ``"console"``; defaults to ``LOG_FORMAT``.
        stream: Output stream, stdout by default.
    """
    global _configured

    resolved_level = _get_log_level() if level is None else _convert_level(level)
    root = logging.getLogger()
    root.setLevel(resolved_level)
    root.handlers.clear()

    use_json = _should_use_json() if log_format is None else log_format == "json"

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(resolved_level)
    handler.setFormatter(StructuredFormatter() if use_json else ConsoleFormatter())
    root.addHandler(handler)

    # urllib3 connection chatter drowns out request logs at DEBUG
    logging.getLogger("urllib3").setLevel(max(resolved_level, logging.WARNING))
    _configured = True


def is_configured() -> bool:
    return _configured


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# =============================================================================
# Helpers
# =============================================================================


def log_event(
    event_name: str,
    level: str | LogLevel = LogLevel.INFO,
    **extra_fields: Any,
) -> None:
    """
    Log a structured event with additional fields.

    Example:
        log_event("contest_selected", contest_id="c1")
    """
    logger = get_logger("foundation_console.event")
    level_name = level.value if isinstance(level, LogLevel) else str(level)
    log_func = getattr(logger, level_name.lower(), logger.info)
    log_func(event_name, extra=extra_fields)


class PerformanceTracker:
    """
    Context manager that logs how long an operation took.

    Example:
        with PerformanceTracker("api_request", method="GET", path="/schools"):
            response = session.get(...)
    """

    def __init__(self, operation: str, *, logger_name: str = "foundation_console.performance", **extra_fields: Any):
        self.operation = operation
        self.extra = extra_fields
        self.logger_name = logger_name
        self._start_time: float | None = None

    def __enter__(self) -> PerformanceTracker:
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start_time is None:
            return
        self.extra["duration_ms"] = round((time.perf_counter() - self._start_time) * 1000, 2)
        logger = get_logger(self.logger_name)
        if exc_type is not None:
            self.extra["error"] = str(exc)
            logger.warning(f"{self.operation}_failed", extra=self.extra)
        else:
            logger.debug(f"{self.operation}_completed", extra=self.extra)
