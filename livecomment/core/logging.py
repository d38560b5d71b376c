"""Structured JSON logging with per-request correlation IDs.

Every record is one JSON line. Identifiers of the entities an operation
touched (stream, comment, report, NG word, user) are lifted into a
``context`` object so log queries can filter on them directly; any other
keyword passed to the ``log_*`` helpers lands under ``extra``.
"""

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Keys promoted from a record's extras into the top-level ``context`` object
CONTEXT_KEYS = (
    "livestream_id",
    "livecomment_id",
    "report_id",
    "word_id",
    "user_id",
    "stream_owner_id",
)

# Attributes every LogRecord carries; never treated as extras
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "correlation_id", "service"}


def get_correlation_id() -> str:
    """Return the request's correlation ID, creating one outside requests."""
    cid = correlation_id_var.get()
    if cid is None:
        cid = str(uuid.uuid4())
        correlation_id_var.set(cid)
    return cid


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    correlation_id_var.set(None)


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def __init__(self, service: str = "livecomment", include_stack_trace: bool = True):
        super().__init__()
        self.service = service
        self.include_stack_trace = include_stack_trace

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None),
        }

        context: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            if key in CONTEXT_KEYS:
                context[key] = _jsonable(value)
            else:
                extra[key] = _jsonable(value)
        if context:
            log_data["context"] = context
        if extra:
            log_data["extra"] = extra

        if record.levelno >= logging.ERROR:
            log_data["source"] = f"{record.pathname}:{record.lineno} in {record.funcName}"

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
            }
            if self.include_stack_trace and exc_tb is not None:
                log_data["exception"]["stack_trace"] = traceback.format_exception(
                    exc_type, exc_value, exc_tb
                )

        return json.dumps(log_data, default=str, ensure_ascii=False)


class CorrelationIdFilter(logging.Filter):
    """Stamp every record with the active correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = get_correlation_id()
        return True


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    include_stack_trace: bool = True,
    service: str = "livecomment",
) -> None:
    """Send all logging to stdout through a single handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of plain text
        include_stack_trace: Include stack traces for logged exceptions
        service: Value of the ``service`` field on every JSON line
    """
    log_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(CorrelationIdFilter())
    if json_format:
        handler.setFormatter(
            StructuredFormatter(service=service, include_stack_trace=include_stack_trace)
        )
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s] %(message)s"
        ))
    root_logger.addHandler(handler)

    # Per-request lines come from RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _log(
    logger: logging.Logger,
    level: int,
    message: str,
    exception: Optional[BaseException] = None,
    **fields: Any,
) -> None:
    # LogRecord refuses extras that shadow its own attributes
    extra = {
        (f"field_{key}" if key in _RECORD_ATTRS else key): value
        for key, value in fields.items()
    }
    extra["correlation_id"] = get_correlation_id()
    # Attribute the record to whoever called log_info/log_warning/log_error
    logger.log(level, message, exc_info=exception, extra=extra, stacklevel=3)


def log_info(logger: logging.Logger, message: str, **fields: Any) -> None:
    _log(logger, logging.INFO, message, **fields)


def log_warning(logger: logging.Logger, message: str, **fields: Any) -> None:
    _log(logger, logging.WARNING, message, **fields)


def log_error(
    logger: logging.Logger,
    message: str,
    exception: Optional[BaseException] = None,
    **fields: Any,
) -> None:
    """Log an error, attaching the exception's traceback when given."""
    _log(logger, logging.ERROR, message, exception=exception, **fields)
