"""
Logging utilities for MDB_FACADE.

Wraps standard library loggers so every record carries a correlation ID
and the database context (db_name, collection, operation) of the call
that produced it. No handlers are installed here.
"""

import contextvars
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mdb_facade_correlation_id", default=None
)

_db_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "mdb_facade_db_context", default=None
)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set a correlation ID in the current context.

    Args:
        correlation_id: Optional correlation ID (generates new one if None)

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    _correlation_id.set(None)


@contextmanager
def db_context(**context: Any) -> Iterator[None]:
    """
    Add database context (collection, operation, ...) to log records
    emitted inside the block. Nested blocks extend the outer context.
    """
    current = _db_context.get() or {}
    token = _db_context.set({**current, **context})
    try:
        yield
    finally:
        _db_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """
    Get current logging context (correlation ID and database context).

    Returns:
        Dictionary with context information
    """
    context: dict[str, Any] = {
        "timestamp": datetime.now().isoformat(),
    }

    correlation_id = get_correlation_id()
    if correlation_id:
        context["correlation_id"] = correlation_id

    current = _db_context.get()
    if current:
        context.update(current)

    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that automatically adds context to log records.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = get_logging_context()

        extra = kwargs.get("extra", {})
        if extra:
            context.update(extra)

        kwargs["extra"] = context
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a contextual logger that automatically adds correlation ID and context.

    Args:
        name: Logger name (typically __name__)

    Returns:
        ContextualLoggerAdapter instance
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})
