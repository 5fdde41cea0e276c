"""Structured logging utilities emitting JSON Lines payloads."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, MutableMapping
from uuid import uuid4

__all__ = [
    "JsonLogFormatter",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
]

PACKAGE_LOGGER = "unitscan"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "trace_id",
    "event",
    "extra_fields",
}


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: MutableMapping[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": message,
        }

        trace_id = getattr(record, "trace_id", None)
        if trace_id:
            payload["trace_id"] = trace_id

        payload["event"] = getattr(record, "event", None) or message

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = _jsonable(value)

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, Mapping):
            payload.update(_jsonable(extra_fields))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def configure_json_logger(
    log_path: Path | None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure the package logger with a JSONL handler.

    Without ``log_path`` records are discarded.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.NullHandler()

    handler.setFormatter(JsonLogFormatter())
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


def flush_handlers(logger: logging.Logger) -> None:
    """Ensure all handlers flush their buffers."""

    for handler in logger.handlers:
        handler.flush()


def generate_trace_id() -> str:
    """Return a unique trace identifier suitable for correlating log events."""

    return uuid4().hex


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
    message: str | None = None,
    **fields: Any,
) -> str:
    """Emit a structured event on ``logger`` and return its trace id."""

    event_trace_id = trace_id or generate_trace_id()
    extra = {
        "trace_id": event_trace_id,
        "event": event,
        "extra_fields": fields,
    }

    logger.log(level, message or event, extra=extra)
    return event_trace_id
