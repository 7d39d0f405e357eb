"""NotificationEnvelope — immutable wrapper delivered to subscribers."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..domain.events import MessageEvent
from ..primitives.clock import utc_now


class NotificationEnvelope(BaseModel):
    """Immutable wrapper around one domain event.

    Carries the serialized payload and the correlation id active when the
    event was published.
    """

    model_config = ConfigDict(frozen=True)

    notification_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = Field(..., description="Event key, e.g. 'message.stored'")
    payload: dict[str, object] = Field(default_factory=dict)
    correlation_id: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def wrap(cls, event: MessageEvent) -> NotificationEnvelope:
        return cls(
            event_type=event.event_type,
            payload=event.model_dump(mode="json"),
            correlation_id=event.correlation_id,
        )
