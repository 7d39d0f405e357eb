"""IBackgroundWorker — lifecycle of deferred engine work."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IBackgroundWorker(Protocol):
    """
    Owner of work that runs after the command that caused it returned.

    Implementations never cancel accepted work: ``stop`` and ``drain`` both
    wait for it. Used by: ``ResponseScheduler``.
    """

    @property
    def running(self) -> bool: ...

    async def start(self) -> None: ...

    async def stop(self) -> None:
        """Finish in-flight work, then stop accepting the lifecycle."""
        ...

    async def drain(self) -> None:
        """Wait until no work is pending, including work added meanwhile."""
        ...
