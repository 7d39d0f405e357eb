"""NotificationHub — bounded, non-blocking fan-out of domain events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..domain.events import enrich_event
from ..tracing import get_correlation_id
from .envelope import NotificationEnvelope

if TYPE_CHECKING:
    from ..domain.events import MessageEvent

logger = logging.getLogger("swift_engine.notifications")


class Subscription:
    """One subscriber's bounded queue of notifications.

    When the queue is full the oldest notification is discarded and counted
    in :attr:`dropped`; publishers never wait on a subscriber.

    Usage::

        async with engine.subscribe({"message.stored"}) as subscription:
            async for notification in subscription:
                ...
    """

    def __init__(
        self,
        hub: NotificationHub,
        event_types: Iterable[str] | None,
        buffer_size: int,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self._hub = hub
        self.event_types: frozenset[str] | None = (
            frozenset(event_types) if event_types is not None else None
        )
        self.buffer_size = buffer_size
        self.dropped = 0
        self._closed = False
        # None is the end-of-stream marker pushed by close().
        self._queue: asyncio.Queue[NotificationEnvelope | None] = asyncio.Queue(
            maxsize=buffer_size
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def accepts(self, event_type: str) -> bool:
        return self.event_types is None or event_type in self.event_types

    def offer(self, notification: NotificationEnvelope) -> None:
        if self._closed:
            return
        self._push(notification)

    def _push(self, item: NotificationEnvelope | None) -> None:
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
        self._queue.put_nowait(item)

    async def get(self, timeout: float | None = None) -> NotificationEnvelope:
        """Wait for the next notification.

        Raises :class:`asyncio.TimeoutError` after *timeout* seconds and
        :class:`LookupError` once the subscription is closed and drained.
        """
        item = await asyncio.wait_for(self._queue.get(), timeout)
        if item is None:
            raise LookupError("subscription is closed")
        return item

    def drain(self) -> list[NotificationEnvelope]:
        """Return every queued notification without waiting."""
        items: list[NotificationEnvelope] = []
        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item is not None:
                items.append(item)
        return items

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._hub.unsubscribe(self)
        self._push(None)

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> NotificationEnvelope:
        item = await self._queue.get()
        if item is None:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


class NotificationHub:
    """Delivers every published event to each matching subscription.

    ``publish`` is synchronous and never blocks, so it is safe to call while
    holding the store lock.
    """

    def __init__(self, default_buffer_size: int = 100) -> None:
        self._default_buffer_size = default_buffer_size
        self._subscriptions: list[Subscription] = []
        self.published_count = 0

    def subscribe(
        self,
        event_types: Iterable[str] | None = None,
        buffer_size: int | None = None,
    ) -> Subscription:
        subscription = Subscription(
            self, event_types, buffer_size or self._default_buffer_size
        )
        self._subscriptions.append(subscription)
        logger.debug(
            "Subscribed to %s (buffer=%d)",
            sorted(subscription.event_types) if subscription.event_types else "*",
            subscription.buffer_size,
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, event: MessageEvent) -> None:
        event = enrich_event(event, correlation_id=get_correlation_id())
        notification = NotificationEnvelope.wrap(event)
        self.published_count += 1
        for subscription in list(self._subscriptions):
            if subscription.accepts(notification.event_type):
                subscription.offer(notification)
