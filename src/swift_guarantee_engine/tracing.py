"""Correlation ID management across commands, deferred tasks and events."""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Any

# ContextVar for correlation tracking across async boundaries.
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Middleware that makes every command carry a correlation id.

    A command arriving without one inherits the id already in context, or a
    fresh one. The id is set in context for the rest of the pipeline, so
    responses scheduled from inside the handler inherit it too. The previous
    context value is restored afterwards.
    """

    def __init__(self, correlation_id_key: str = "correlation_id") -> None:
        self._key = correlation_id_key

    async def __call__(self, message: Any, next_handler: Any) -> Any:
        cid = getattr(message, self._key, None)
        if not cid:
            cid = get_correlation_id() or generate_correlation_id()
            if hasattr(message, "model_copy"):
                message = message.model_copy(update={self._key: cid})
        token = _correlation_id.set(str(cid))
        try:
            return await next_handler(message)
        finally:
            _correlation_id.reset(token)
