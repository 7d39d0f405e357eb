from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from swift_guarantee_engine.adapters.memory import InMemoryMessageStore
from swift_guarantee_engine.domain import (
    Direction,
    MessageFilter,
    MessageQuery,
    MessageStatus,
    MessageType,
    Timeframe,
)
from swift_guarantee_engine.notifications import NotificationHub
from swift_guarantee_engine.ports import IMessageStore
from swift_guarantee_engine.primitives.exceptions import (
    ConfigurationError,
    DuplicateMessageError,
    MessageNotFoundError,
)

BASE = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    return BASE + timedelta(seconds=seconds)


@pytest.fixture
def store() -> InMemoryMessageStore:
    return InMemoryMessageStore(now=lambda: at(3600))


async def _store_five(store, make_message) -> list:
    messages = [
        make_message(
            MessageType.ISSUE_GUARANTEE,
            {"transactionReference": f"GTR{i}", "applicantName": f"Applicant {i}"},
            timestamp=at(i),
        )
        for i in range(5)
    ]
    for message in messages:
        await store.store(message)
    return messages


def test_store_satisfies_port() -> None:
    assert isinstance(InMemoryMessageStore(), IMessageStore)


@pytest.mark.asyncio
async def test_store_and_get(store, make_message) -> None:
    message = make_message(content={"transactionReference": "GTR1"}, timestamp=at(0))

    stored = await store.store(message)

    assert stored.stored_at == at(3600)
    assert stored.last_updated == at(3600)
    assert stored.processed_at == at(3600)
    assert "gtr1" in stored.searchable_content
    assert await store.get(message.id) is message
    assert await store.get("missing") is None
    assert message.id in store
    assert len(store) == 1


@pytest.mark.asyncio
async def test_explicit_processed_at_is_kept(store, make_message) -> None:
    message = make_message(timestamp=at(0), processed_at=at(1))

    await store.store(message)

    assert message.processed_at == at(1)


@pytest.mark.asyncio
async def test_duplicate_id_is_rejected_without_mutation(store, make_message) -> None:
    message = make_message(timestamp=at(0))
    await store.store(message)

    clone = make_message(MessageType.FREE_FORMAT, id=message.id, timestamp=at(1))
    with pytest.raises(DuplicateMessageError):
        await store.store(clone)

    stats = await store.statistics()
    assert stats.total_messages == 1
    assert stats.by_type == {"MT760": 1}
    assert len(await store.history()) == 1


@pytest.mark.asyncio
async def test_query_pages_newest_first(store, make_message) -> None:
    messages = await _store_five(store, make_message)

    page = await store.query(MessageQuery(limit=3))

    assert [m.id for m in page.messages] == [m.id for m in messages[::-1][:3]]
    assert page.total == 5
    assert page.has_more

    last = await store.query(MessageQuery(limit=3, offset=3))
    assert [m.id for m in last.messages] == [messages[1].id, messages[0].id]
    assert not last.has_more


@pytest.mark.asyncio
async def test_query_ascending_and_filtered(store, make_message) -> None:
    await _store_five(store, make_message)
    incoming = make_message(
        MessageType.ACKNOWLEDGE,
        {"originalReference": "GTR1", "acknowledgmentType": "RECEIVED"},
        direction=Direction.INCOMING,
        status=MessageStatus.RECEIVED,
        timestamp=at(10),
    )
    await store.store(incoming)

    page = await store.query(
        MessageQuery(filter=MessageFilter(direction=Direction.INCOMING))
    )
    assert [m.id for m in page.messages] == [incoming.id]

    ordered = await store.query(MessageQuery(descending=False, limit=2))
    assert [m.timestamp for m in ordered.messages] == [at(0), at(1)]

    by_text = await store.query(MessageQuery(filter=MessageFilter(text="applicant 3")))
    assert by_text.total == 1


def test_unknown_sort_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        MessageQuery(order_by="colour")


@pytest.mark.asyncio
async def test_search_is_case_insensitive(store, make_message) -> None:
    await _store_five(store, make_message)

    results = await store.search("APPLICANT")

    assert results.total == 5
    assert results.query == "APPLICANT"
    assert results.results[0].timestamp == at(4)

    limited = await store.search("applicant", limit=2)
    assert len(limited.results) == 2
    assert limited.total == 5

    filtered = await store.search(
        "applicant", MessageFilter(status=MessageStatus.FAILED)
    )
    assert filtered.total == 0


@pytest.mark.asyncio
async def test_by_date_range_is_inclusive(store, make_message) -> None:
    await _store_five(store, make_message)

    found = await store.by_date_range(at(1), at(3))

    assert [m.timestamp for m in found] == [at(3), at(2), at(1)]

    with pytest.raises(ConfigurationError, match="start must not be after end"):
        await store.by_date_range(at(3), at(1))


@pytest.mark.asyncio
async def test_update_status_records_history_and_moves_counts(
    store, make_message
) -> None:
    message = make_message(timestamp=at(0))
    await store.store(message)

    updated = await store.update_status(
        message.id, MessageStatus.ACKNOWLEDGED, "counterparty confirmed"
    )

    assert updated.status is MessageStatus.ACKNOWLEDGED
    transition = updated.status_history[-1]
    assert transition.previous_status is MessageStatus.SENT
    assert transition.new_status is MessageStatus.ACKNOWLEDGED
    assert transition.note == "counterparty confirmed"
    assert updated.last_updated == transition.timestamp

    stats = await store.statistics()
    assert stats.total_messages == 1
    assert stats.by_status == {"ACKNOWLEDGED": 1}


@pytest.mark.asyncio
async def test_update_status_of_unknown_message(store) -> None:
    with pytest.raises(MessageNotFoundError):
        await store.update_status("nope", MessageStatus.PROCESSED)


@pytest.mark.asyncio
async def test_history_is_bounded_but_index_is_not(make_message) -> None:
    store = InMemoryMessageStore(max_history_size=3)
    messages = [make_message(timestamp=at(i)) for i in range(5)]
    for message in messages:
        await store.store(message)

    history = await store.history()

    assert [m.id for m in history] == [m.id for m in messages[::-1][:3]]
    assert len(store) == 5
    assert await store.get(messages[0].id) is messages[0]
    assert len(await store.history(limit=1)) == 1

    stats = await store.statistics()
    assert stats.messages_in_memory == 5
    assert stats.history_size == 3


@pytest.mark.asyncio
async def test_clear_resets_everything(store, make_message) -> None:
    await _store_five(store, make_message)

    assert await store.clear() == 5

    assert len(store) == 0
    assert await store.history() == []
    stats = await store.statistics()
    assert stats.total_messages == 0
    assert stats.by_type == {}


@pytest.mark.asyncio
async def test_statistics_track_processing_and_response_latency(
    store, make_message
) -> None:
    original = make_message(timestamp=at(0), processed_at=at(0.5))
    reply = make_message(
        MessageType.ACKNOWLEDGE,
        direction=Direction.INCOMING,
        status=MessageStatus.RECEIVED,
        timestamp=at(2),
        processed_at=at(2.5),
        related_message_id=original.id,
        is_response=True,
    )
    await store.store(original)
    await store.store(reply)

    stats = await store.statistics()

    assert stats.total_messages == 2
    assert stats.by_type == {"MT760": 1, "MT768": 1}
    assert stats.by_status == {"SENT": 1, "RECEIVED": 1}
    assert stats.average_processing_time_ms == pytest.approx(500.0)
    assert stats.average_response_time_ms == pytest.approx(2000.0)


@pytest.mark.asyncio
async def test_flow_analysis_uses_the_window(store, make_message) -> None:
    old = make_message(timestamp=at(-7200))
    recent = make_message(timestamp=at(60))
    reply = make_message(
        MessageType.ACKNOWLEDGE,
        direction=Direction.INCOMING,
        status=MessageStatus.RECEIVED,
        timestamp=at(61),
        related_message_id=recent.id,
        is_response=True,
    )
    for message in (old, recent, reply):
        await store.store(message)

    hour = await store.flow_analysis(Timeframe.HOUR)
    assert hour.window_start == at(0)
    assert hour.total_messages == 2
    assert hour.inbound == 1
    assert hour.outbound == 1
    assert hour.by_type == {"MT760": 1, "MT768": 1}
    assert hour.average_response_time_ms == pytest.approx(1000.0)

    day = await store.flow_analysis("day")
    assert day.total_messages == 3


@pytest.mark.asyncio
async def test_flow_analysis_rejects_unknown_timeframe(store) -> None:
    with pytest.raises(ConfigurationError):
        await store.flow_analysis("fortnight")


@pytest.mark.asyncio
async def test_mutations_publish_events(make_message) -> None:
    hub = NotificationHub()
    store = InMemoryMessageStore(publisher=hub)
    subscription = hub.subscribe()
    message = make_message(timestamp=at(0))

    await store.store(message)
    await store.update_status(message.id, MessageStatus.PROCESSED)
    await store.clear()

    events = subscription.drain()
    assert [n.event_type for n in events] == [
        "message.stored",
        "message.status_changed",
        "messages.cleared",
    ]
    assert events[0].payload["message_id"] == message.id
    assert events[1].payload["new_status"] == "PROCESSED"
    assert events[2].payload["cleared_count"] == 1
