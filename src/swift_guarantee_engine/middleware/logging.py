"""Command logging middleware: human-readable and JSON variants."""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..tracing import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("swift_engine.middleware")

# Command attributes named in log lines, in display order.
_DETAIL_FIELDS = ("message_type", "message_id", "name", "status")


def describe(command: Any) -> str:
    """Label such as ``SubmitMessage[message_type=MT760]`` for a command."""
    details = []
    for field in _DETAIL_FIELDS:
        value = getattr(command, field, None)
        if value is not None:
            details.append(f"{field}={getattr(value, 'value', value)}")
    name = type(command).__name__
    return f"{name}[{', '.join(details)}]" if details else name


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _correlation_of(command: Any) -> str | None:
    return get_correlation_id() or getattr(command, "correlation_id", None)


class LoggingMiddleware(IMiddleware):
    """Logs each command's label, correlation id and duration."""

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        label = describe(message)
        logger.info(
            "Handling %s (correlation_id=%s)", label, _correlation_of(message)
        )
        start = time.perf_counter()
        try:
            result = await next_handler(message)
        except Exception:
            logger.exception("%s failed after %.2fms", label, _elapsed_ms(start))
            raise
        logger.info("%s completed in %.2fms", label, _elapsed_ms(start))
        return result


class StructuredLoggingMiddleware(IMiddleware):
    """Emits one JSON log entry per command with kind, type, outcome, duration."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logging.getLogger("swift_engine.middleware.structured")

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        start = time.perf_counter()
        outcome = "success"
        try:
            return await next_handler(message)
        except Exception:
            outcome = "error"
            raise
        finally:
            entry = {
                "kind": "command",
                "message_type": type(message).__name__,
                "command": describe(message),
                "outcome": outcome,
                "duration_ms": round(_elapsed_ms(start), 2),
                "correlation_id": _correlation_of(message),
            }
            self._log.info(json.dumps(entry))
