"""INotificationPublisher — fan-out port for domain events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import MessageEvent


@runtime_checkable
class INotificationPublisher(Protocol):
    """
    Port the store uses to announce changes.

    Implementations must never block the caller: a slow consumer loses
    notifications rather than stalling a store mutation.
    """

    def publish(self, event: MessageEvent) -> None:
        """Deliver *event* to every interested subscriber."""
        ...
