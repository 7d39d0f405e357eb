"""SwiftMessage aggregate root and its status history."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..primitives.clock import utc_now
from .enums import Direction, MessageStatus, MessageType
from .events import MessageEvent, MessageStatusChanged

# Fields holding a message's own business reference.
OWN_REFERENCE_FIELDS: tuple[str, ...] = (
    "transactionReference",
    "amendmentReference",
    "claimReference",
)

# Fields pointing at another message's business reference.
LINK_REFERENCE_FIELDS: tuple[str, ...] = ("originalReference", "relatedReference")

# Which own-reference field identifies a message of each type, in priority order.
PRIMARY_REFERENCE_FIELDS: dict[MessageType, tuple[str, ...]] = {
    MessageType.ISSUE_GUARANTEE: ("transactionReference",),
    MessageType.AMEND_GUARANTEE: ("amendmentReference",),
    MessageType.CONFIRM_AMENDMENT: ("transactionReference", "amendmentReference"),
    MessageType.ACKNOWLEDGE: ("transactionReference",),
    MessageType.DISCREPANCY_ADVICE: ("claimReference",),
    MessageType.FREE_FORMAT: ("transactionReference",),
}


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class StatusTransition(BaseModel):
    """One entry of the append-only status history."""

    model_config = ConfigDict(frozen=True)

    previous_status: MessageStatus
    new_status: MessageStatus
    timestamp: datetime = Field(default_factory=utc_now)
    note: str | None = None


class SwiftMessage(BaseModel):
    """A guarantee message and the system-of-record metadata around it.

    ``id``, ``type`` and ``timestamp`` are frozen once the instance exists.
    ``raw_form`` is produced by the codec from ``content`` and is never edited
    on its own. Status changes go through :meth:`transition_to`, which appends
    to ``status_history`` and records a :class:`MessageStatusChanged` event.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    type: MessageType = Field(frozen=True)
    direction: Direction
    status: MessageStatus
    sender_id: str
    receiver_id: str
    content: dict[str, Any] = Field(default_factory=dict)
    raw_form: str = ""
    timestamp: datetime = Field(default_factory=utc_now, frozen=True)
    related_message_id: str | None = None
    is_response: bool = False
    processed_at: datetime | None = None
    stored_at: datetime | None = None
    last_updated: datetime | None = None
    status_history: list[StatusTransition] = Field(default_factory=list)
    searchable_content: str = ""

    _domain_events: list[MessageEvent] = PrivateAttr(
        default_factory=lambda: cast("list[MessageEvent]", [])
    )

    # ── References ───────────────────────────────────────────────

    def field_text(self, name: str) -> str | None:
        """Stripped string value of a content field, ``None`` when blank."""
        return _text(self.content.get(name))

    @property
    def primary_reference(self) -> str | None:
        for name in PRIMARY_REFERENCE_FIELDS[self.type]:
            value = self.field_text(name)
            if value:
                return value
        return None

    @property
    def own_references(self) -> set[str]:
        return {
            value
            for value in (self.field_text(name) for name in OWN_REFERENCE_FIELDS)
            if value
        }

    @property
    def link_references(self) -> set[str]:
        return {
            value
            for value in (self.field_text(name) for name in LINK_REFERENCE_FIELDS)
            if value
        }

    # ── State changes ────────────────────────────────────────────

    def transition_to(
        self, new_status: MessageStatus, note: str | None = None
    ) -> StatusTransition:
        """Move to *new_status*, keeping an auditable trail."""
        transition = StatusTransition(
            previous_status=self.status, new_status=new_status, note=note
        )
        self.status_history.append(transition)
        self.status = new_status
        self.last_updated = transition.timestamp
        self.add_event(
            MessageStatusChanged(
                message_id=self.id,
                previous_status=transition.previous_status,
                new_status=new_status,
                note=note,
            )
        )
        return transition

    def build_searchable_content(self) -> str:
        parts: list[str] = [
            self.type.value,
            self.status.value,
            self.direction.value,
            self.sender_id,
            self.receiver_id,
        ]
        for value in self.content.values():
            if isinstance(value, str):
                parts.append(value)
            elif isinstance(value, (list, tuple)):
                parts.extend(item for item in value if isinstance(item, str))
        return " ".join(parts).lower()

    # ── Events ───────────────────────────────────────────────────

    def add_event(self, event: MessageEvent) -> None:
        """Record a domain event to be dispatched later."""
        self._domain_events.append(event)

    def collect_events(self) -> list[MessageEvent]:
        """Return all recorded events and clear the internal list."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events
