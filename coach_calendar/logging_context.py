"""Request ID logging context for tracing calendar operations.

Provides a request_id-aware logger that attaches a correlation ID to every
log message, so a single booking or cancellation can be followed through
the facade and whichever store is serving it.

Usage:
    from coach_calendar.logging_context import get_request_logger, set_request_id

    set_request_id("REQ-3f9a1c")
    logger = get_request_logger(__name__)
    logger.info("Booking requested")  # record.request_id == "REQ-3f9a1c"

``configure_logging`` installs LOG_FORMAT on the root handler and attaches
the filter there too, so records from any logger can be formatted.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

_request_id: ContextVar[str] = ContextVar("request_id", default="NO_REQUEST_ID")

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the correlation ID for the current async context.

    A fresh ``REQ-`` identifier is generated when none is given.
    """
    if request_id is None:
        request_id = f"REQ-{uuid.uuid4().hex[:6]}"
    _request_id.set(request_id)
    return request_id


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger with the RequestIdFilter attached.

    The filter adds ``request_id`` to each record so formatters can
    include ``%(request_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger


def attach_request_id(handler: logging.Handler) -> logging.Handler:
    """Add a RequestIdFilter to ``handler`` unless it already has one."""
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())
    return handler


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with LOG_FORMAT and request ids on every handler."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in logging.getLogger().handlers:
        attach_request_id(handler)
