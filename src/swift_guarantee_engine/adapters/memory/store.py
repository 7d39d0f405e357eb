"""InMemoryMessageStore — indexed, bounded, lock-serialized message store."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter, deque
from typing import TYPE_CHECKING

from ...domain.enums import Direction
from ...domain.events import MessagesCleared, MessageStored
from ...domain.queries import (
    FlowAnalysis,
    MessageFilter,
    MessagePage,
    MessageQuery,
    MessageStatistics,
    SearchResults,
    Timeframe,
)
from ...primitives.clock import utc_now
from ...primitives.exceptions import (
    ConfigurationError,
    DuplicateMessageError,
    MessageNotFoundError,
    StructuralError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from ...domain.enums import MessageStatus
    from ...domain.events import MessageEvent
    from ...domain.message import SwiftMessage
    from ...ports.notifications import INotificationPublisher

logger = logging.getLogger("swift_engine.store")


class _RunningAverage:
    """Simple moving average over every sample seen since the last reset."""

    def __init__(self) -> None:
        self.count = 0
        self.value = 0.0

    def add(self, sample: float) -> None:
        self.count += 1
        self.value += (sample - self.value) / self.count


def _elapsed_ms(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() * 1000


class InMemoryMessageStore:
    """In-memory implementation of ``IMessageStore``.

    Keeps a primary index keyed by message id plus a newest-first history
    capped at *max_history_size*. Statistics are maintained incrementally on
    every mutation. Mutations take one ``asyncio.Lock``; reads work on a
    snapshot of the index and never wait.
    """

    def __init__(
        self,
        max_history_size: int = 1000,
        publisher: INotificationPublisher | None = None,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._max_history_size = max_history_size
        self._publisher = publisher
        self._now = now
        self._lock = asyncio.Lock()
        self._messages: dict[str, SwiftMessage] = {}
        self._history: deque[SwiftMessage] = deque(maxlen=max_history_size)
        self._reset_statistics()

    def _reset_statistics(self) -> None:
        self._total = 0
        self._by_type: Counter[str] = Counter()
        self._by_status: Counter[str] = Counter()
        self._processing = _RunningAverage()
        self._latency = _RunningAverage()

    # ── Mutations ────────────────────────────────────────────────

    async def store(self, message: SwiftMessage) -> SwiftMessage:
        self._check_structure(message)
        async with self._lock:
            if message.id in self._messages:
                raise DuplicateMessageError(message.id)

            now = self._now()
            message.stored_at = now
            message.last_updated = now
            if message.processed_at is None:
                message.processed_at = now
            message.searchable_content = message.build_searchable_content()

            self._messages[message.id] = message
            self._history.appendleft(message)
            self._record_statistics(message)

            events: list[MessageEvent] = message.collect_events()
            events.append(
                MessageStored(
                    message_id=message.id,
                    message_type=message.type,
                    direction=message.direction,
                    status=message.status,
                    is_response=message.is_response,
                    related_message_id=message.related_message_id,
                )
            )
            self._publish(events)

        logger.debug(
            "Stored %s %s (%s, %s)",
            message.type.value,
            message.id,
            message.direction.value,
            message.status.value,
        )
        return message

    @staticmethod
    def _check_structure(message: SwiftMessage) -> None:
        missing = [
            name
            for name in ("id", "type", "timestamp")
            if not getattr(message, name, None)
        ]
        if missing:
            raise StructuralError(
                f"Message is missing required attributes: {', '.join(missing)}"
            )

    def _record_statistics(self, message: SwiftMessage) -> None:
        self._total += 1
        self._by_type[message.type.value] += 1
        self._by_status[message.status.value] += 1
        if message.processed_at is not None:
            self._processing.add(_elapsed_ms(message.timestamp, message.processed_at))
        latency = self._response_latency_ms(message)
        if latency is not None:
            self._latency.add(latency)

    def _response_latency_ms(self, message: SwiftMessage) -> float | None:
        if not message.is_response or not message.related_message_id:
            return None
        original = self._messages.get(message.related_message_id)
        if original is None:
            return None
        return _elapsed_ms(original.timestamp, message.timestamp)

    async def update_status(
        self,
        message_id: str,
        status: MessageStatus,
        note: str | None = None,
    ) -> SwiftMessage:
        async with self._lock:
            message = self._messages.get(message_id)
            if message is None:
                raise MessageNotFoundError(message_id)
            transition = message.transition_to(status, note)
            # A status change moves one message between buckets.
            self._by_status[transition.previous_status.value] -= 1
            self._by_status[status.value] += 1
            message.searchable_content = message.build_searchable_content()
            self._publish(message.collect_events())

        logger.info(
            "Message %s status %s -> %s",
            message_id,
            transition.previous_status.value,
            status.value,
        )
        return message

    async def clear(self) -> int:
        async with self._lock:
            cleared = len(self._messages)
            self._messages.clear()
            self._history.clear()
            self._reset_statistics()
            self._publish([MessagesCleared(cleared_count=cleared)])
        logger.info("Cleared %d message(s)", cleared)
        return cleared

    def _publish(self, events: Iterable[MessageEvent]) -> None:
        if self._publisher is None:
            return
        for event in events:
            self._publisher.publish(event)

    # ── Reads ────────────────────────────────────────────────────

    async def get(self, message_id: str) -> SwiftMessage | None:
        return self._messages.get(message_id)

    async def query(self, query: MessageQuery) -> MessagePage:
        matches = [
            message
            for message in list(self._messages.values())
            if query.filter.is_satisfied_by(message)
        ]
        matches.sort(
            key=lambda m: (getattr(m, query.order_by), m.timestamp),
            reverse=query.descending,
        )
        window = matches[query.offset : query.offset + query.limit]
        return MessagePage(
            messages=window,
            total=len(matches),
            offset=query.offset,
            limit=query.limit,
        )

    async def search(
        self,
        text: str,
        message_filter: MessageFilter | None = None,
        limit: int = 50,
    ) -> SearchResults:
        needle = text.strip().lower()
        matches = [
            message
            for message in self._newest_first()
            if needle in message.searchable_content
            and (message_filter is None or message_filter.is_satisfied_by(message))
        ]
        return SearchResults(results=matches[:limit], total=len(matches), query=text)

    async def by_date_range(
        self,
        start: datetime,
        end: datetime,
        message_filter: MessageFilter | None = None,
    ) -> list[SwiftMessage]:
        if start > end:
            raise ConfigurationError("start must not be after end")
        return [
            message
            for message in self._newest_first()
            if start <= message.timestamp <= end
            and (message_filter is None or message_filter.is_satisfied_by(message))
        ]

    async def history(self, limit: int | None = None) -> list[SwiftMessage]:
        items = list(self._history)
        return items if limit is None else items[:limit]

    async def list_all(self) -> list[SwiftMessage]:
        return sorted(self._messages.values(), key=lambda m: m.timestamp)

    def _newest_first(self) -> list[SwiftMessage]:
        return sorted(self._messages.values(), key=lambda m: m.timestamp, reverse=True)

    async def statistics(self) -> MessageStatistics:
        return MessageStatistics(
            total_messages=self._total,
            by_type=dict(self._by_type),
            by_status={k: v for k, v in self._by_status.items() if v > 0},
            average_processing_time_ms=self._processing.value,
            average_response_time_ms=self._latency.value,
            messages_in_memory=len(self._messages),
            history_size=len(self._history),
        )

    async def flow_analysis(self, timeframe: Timeframe | str) -> FlowAnalysis:
        try:
            timeframe = Timeframe(timeframe)
        except ValueError:
            raise ConfigurationError(f"Unknown timeframe: {timeframe!r}") from None
        window_start = self._now() - timeframe.window
        in_window = [
            message
            for message in list(self._messages.values())
            if message.timestamp >= window_start
        ]
        latency = _RunningAverage()
        for message in in_window:
            sample = self._response_latency_ms(message)
            if sample is not None:
                latency.add(sample)
        return FlowAnalysis(
            timeframe=timeframe,
            window_start=window_start,
            total_messages=len(in_window),
            inbound=sum(1 for m in in_window if m.direction is Direction.INCOMING),
            outbound=sum(1 for m in in_window if m.direction is Direction.OUTGOING),
            by_type=dict(Counter(m.type.value for m in in_window)),
            by_status=dict(Counter(m.status.value for m in in_window)),
            average_response_time_ms=latency.value,
        )

    # ── Test helpers ─────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages
