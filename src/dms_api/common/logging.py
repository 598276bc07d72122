"""Console logging for the DMS API process.

One formatter renders every record as a single line:

    2026-03-02T10:15:04.112Z INFO  dms_api.features.documents.service [cid=4f1c...]
    document.create.success document_id=12 user_id=3 department_id=1

Request-scoped correlation ids live in a context variable bound by
:class:`dms_api.common.middleware.RequestContextMiddleware`. Structured fields
are passed through ``extra=log_context(...)``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from dms_api.settings import Settings

_CORRELATION_ID: ContextVar[str | None] = ContextVar(
    "dms_api_correlation_id",
    default=None,
)

# Attributes owned by LogRecord itself; everything else is an `extra` field.
_STANDARD_ATTRS: set[str] = {
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
    "message",
    "asctime",
    "correlation_id",
    "taskName",
    "color_message",
}

_CONFIGURED_FLAG = "_dms_configured"


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as single-line console output."""

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        fmt = "%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s"
        super().__init__(fmt=fmt, datefmt=self._time_format)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        base = dt.strftime(datefmt or self._time_format)
        return f"{base}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        record.correlation_id = (
            getattr(record, "correlation_id", None) or _CORRELATION_ID.get() or "-"
        )
        base = super().format(record)

        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


def setup_logging(settings: Settings) -> None:
    """Install the console handler on the root logger.

    Safe to call repeatedly; later calls only adjust the level. uvicorn,
    alembic and sqlalchemy loggers are routed through the same handler.
    """

    root_logger = logging.getLogger()
    level = getattr(logging, settings.logging_level.upper(), logging.INFO)

    if getattr(root_logger, _CONFIGURED_FLAG, False):
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for name in (
        "uvicorn",
        "uvicorn.error",
        "uvicorn.access",
        "alembic",
        "alembic.runtime.migration",
        "sqlalchemy",
    ):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True

    setattr(root_logger, _CONFIGURED_FLAG, True)


def bind_request_context(correlation_id: str | None) -> None:
    """Bind a correlation ID to the logging context for the current request."""
    _CORRELATION_ID.set(correlation_id)


def clear_request_context() -> None:
    _CORRELATION_ID.set(None)


def log_context(
    *,
    document_id: int | None = None,
    user_id: int | None = None,
    department_id: int | None = None,
    category_id: int | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a consistent ``extra`` payload for structured logs.

    Example:
        logger.info(
            "document.create.success",
            extra=log_context(document_id=doc.id, user_id=caller.id),
        )
    """

    ctx: dict[str, Any] = {}
    if document_id is not None:
        ctx["document_id"] = document_id
    if user_id is not None:
        ctx["user_id"] = user_id
    if department_id is not None:
        ctx["department_id"] = department_id
    if category_id is not None:
        ctx["category_id"] = category_id
    ctx.update(extra)
    return ctx


def _format_extra_value(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


__all__ = [
    "ConsoleLogFormatter",
    "bind_request_context",
    "clear_request_context",
    "log_context",
    "setup_logging",
]
