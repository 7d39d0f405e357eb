"""Domain events raised by message mutations."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .enums import Direction, MessageStatus, MessageType


class MessageEvent(BaseModel):
    """Base class for all message events.

    Events are immutable and carry tracing context. ``event_type`` is the
    routing key used by the notification hub.
    """

    model_config = ConfigDict(frozen=True)

    event_type: ClassVar[str] = "message.event"

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    message_id: str | None = None
    correlation_id: str | None = None


class MessageStored(MessageEvent):
    event_type: ClassVar[str] = "message.stored"

    message_type: MessageType
    direction: Direction
    status: MessageStatus
    is_response: bool = False
    related_message_id: str | None = None


class MessageStatusChanged(MessageEvent):
    event_type: ClassVar[str] = "message.status_changed"

    previous_status: MessageStatus
    new_status: MessageStatus
    note: str | None = None


class MessagesCleared(MessageEvent):
    event_type: ClassVar[str] = "messages.cleared"

    cleared_count: int = 0


def enrich_event(event: MessageEvent, *, correlation_id: str | None) -> MessageEvent:
    """Return a copy of *event* with the correlation id injected.

    If the event already carries one the original value is kept.
    """
    if not correlation_id or event.correlation_id:
        return event
    return event.model_copy(update={"correlation_id": correlation_id})
