"""CommandDispatcher — routes commands through middleware to handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..middleware.pipeline import build_pipeline

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.middleware import IMiddleware
    from .commands import Command

logger = logging.getLogger("swift_engine.dispatcher")


class CommandDispatcher:
    """Maps each command type to one async handler.

    Every dispatch runs through the same middleware chain; the first
    middleware in the list is the outermost.
    """

    def __init__(self, middlewares: list[IMiddleware] | None = None) -> None:
        self._middlewares: list[IMiddleware] = list(middlewares or [])
        self._handlers: dict[type[Command], Callable[[Any], Awaitable[Any]]] = {}

    def register(
        self,
        command_type: type[Command],
        handler: Callable[[Any], Awaitable[Any]],
    ) -> None:
        if command_type in self._handlers:
            raise ValueError(f"Handler already registered for {command_type.__name__}")
        self._handlers[command_type] = handler
        logger.debug("Registered handler for %s", command_type.__name__)

    def add_middleware(self, middleware: IMiddleware) -> None:
        self._middlewares.append(middleware)

    async def send(self, command: Command) -> Any:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise ValueError(
                f"No handler registered for command {type(command).__name__}"
            )
        pipeline = build_pipeline(self._middlewares, handler)
        return await pipeline(command)
