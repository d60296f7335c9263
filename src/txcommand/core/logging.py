"""Centralised logging configuration for txcommand."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import get_session_id

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(session_id)s | %(message)s"

_RESERVED_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
}


class JsonLogFormatter(logging.Formatter):
    """Render log records as structured JSON objects."""

    def __init__(
        self,
        *,
        defaults: dict[str, Any] | None = None,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._defaults = defaults or {}

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = dict(self._defaults)
        payload.update(
            {
                "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                "session_id": getattr(record, "session_id", "-"),
            }
        )

        for key, value in record.__dict__.items():
            if key in _RESERVED_LOG_RECORD_ATTRS or key == "session_id":
                continue
            payload.setdefault(key, self._coerce_extra(value))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False, default=str)

    @staticmethod
    def _coerce_extra(value: Any) -> Any:
        try:
            json.dumps(value)
        except TypeError:
            return str(value)
        return value


class SessionContextFilter(logging.Filter):
    """Attach the active session identifier to emitted log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.session_id = get_session_id()
        return True


def configure_logging(settings: Settings) -> None:
    """Apply a structured logging configuration using the provided settings."""

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatters: dict[str, Any] = {
        "json": {
            "()": JsonLogFormatter,
            "defaults": {
                "service": settings.project_name,
                "environment": settings.environment,
            },
        },
        "standard": {
            "format": _LOG_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": {
            "session_context": {"()": SessionContextFilter},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json" if settings.log_json else "standard",
                "level": level,
                "filters": ["session_context"],
            }
        },
        "loggers": {
            "": {"handlers": ["default"], "level": level},
            "txcommand": {"handlers": ["default"], "level": level, "propagate": False},
            "sqlalchemy.engine": {
                "handlers": ["default"],
                "level": logging.INFO if settings.db_echo else logging.WARNING,
                "propagate": False,
            },
            "pymongo": {"handlers": ["default"], "level": logging.WARNING, "propagate": False},
        },
    }
    logging.config.dictConfig(config)
