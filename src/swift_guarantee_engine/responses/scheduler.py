"""ResponseScheduler — deferred, never-cancelled background work."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..ports.background_worker import IBackgroundWorker

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("swift_engine.scheduler")


class ResponseScheduler(IBackgroundWorker):
    """Runs coroutines after a delay on the running event loop.

    Every scheduled job owns an ``asyncio.Task``. Jobs are never cancelled:
    :meth:`stop` and :meth:`drain` wait until each in-flight job has run,
    including jobs scheduled by other jobs. A failing job is logged and does
    not affect the others.

    Delays are multiplied by *delay_scale*; ``0`` runs jobs on the next loop
    iteration, which keeps tests fast.

    Implements ``IBackgroundWorker`` (``start`` / ``stop``).
    """

    def __init__(self, delay_scale: float = 1.0) -> None:
        if delay_scale < 0:
            raise ValueError("delay_scale must not be negative")
        self._delay_scale = delay_scale
        self._tasks: set[asyncio.Task[None]] = set()
        self._running = False
        self.completed = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        logger.info("ResponseScheduler started (delay_scale=%.2f)", self._delay_scale)

    async def stop(self) -> None:
        await self.drain()
        self._running = False
        logger.info(
            "ResponseScheduler stopped (completed=%d, failed=%d)",
            self.completed,
            self.failed,
        )

    def schedule(
        self,
        delay_seconds: float,
        job: Callable[[], Awaitable[None]],
        label: str = "job",
    ) -> asyncio.Task[None]:
        """Run *job* after *delay_seconds* (scaled).

        Must be called from inside a running event loop. The task inherits
        the caller's context variables.
        """
        delay = max(0.0, delay_seconds) * self._delay_scale
        task = asyncio.create_task(self._run(delay, job, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Scheduled %s in %.3fs", label, delay)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled job, including ones scheduled meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _run(
        self, delay: float, job: Callable[[], Awaitable[None]], label: str
    ) -> None:
        await asyncio.sleep(delay)
        try:
            await job()
        except Exception:
            self.failed += 1
            logger.exception("Scheduled %s failed", label)
        else:
            self.completed += 1
