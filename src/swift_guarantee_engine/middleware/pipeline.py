"""Middleware chaining for command dispatch."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.middleware import IMiddleware

    CommandHandler = Callable[[Any], Awaitable[Any]]


def build_pipeline(
    middlewares: list[IMiddleware],
    handler: CommandHandler,
) -> CommandHandler:
    """Wrap *handler* so each command passes through *middlewares* in order.

    ``middlewares[0]`` sees the command first and the result last. An empty
    list returns *handler* unchanged.
    """
    pipeline = handler
    for middleware in reversed(middlewares):
        pipeline = partial(_invoke, middleware, pipeline)
    return pipeline


async def _invoke(
    middleware: IMiddleware, next_handler: CommandHandler, command: Any
) -> Any:
    return await middleware(command, next_handler)
