"""Query value objects and read-model snapshots for the message store."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..primitives.exceptions import ConfigurationError
from .enums import Direction, MessageStatus, MessageType
from .message import SwiftMessage

SORT_KEYS: frozenset[str] = frozenset(
    {"timestamp", "type", "status", "direction", "sender_id", "receiver_id"}
)


class MessageFilter(BaseModel):
    """Conjunction of optional criteria; an empty filter matches everything."""

    model_config = ConfigDict(frozen=True)

    type: MessageType | None = None
    status: MessageStatus | None = None
    direction: Direction | None = None
    text: str | None = None
    is_response: bool | None = None
    related_message_id: str | None = None

    def is_satisfied_by(self, candidate: SwiftMessage) -> bool:
        if self.type is not None and candidate.type is not self.type:
            return False
        if self.status is not None and candidate.status is not self.status:
            return False
        if self.direction is not None and candidate.direction is not self.direction:
            return False
        if self.is_response is not None and candidate.is_response != self.is_response:
            return False
        if (
            self.related_message_id is not None
            and candidate.related_message_id != self.related_message_id
        ):
            return False
        if self.text:
            haystack = (
                candidate.searchable_content or candidate.build_searchable_content()
            )
            if self.text.lower() not in haystack:
                return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class MessageQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    filter: MessageFilter = Field(default_factory=MessageFilter)
    order_by: str = "timestamp"
    descending: bool = True
    limit: int = Field(default=100, ge=1)
    offset: int = Field(default=0, ge=0)

    @field_validator("order_by")
    @classmethod
    def _known_sort_key(cls, value: str) -> str:
        if value not in SORT_KEYS:
            raise ConfigurationError(
                f"Unknown sort key {value!r}; expected one of {sorted(SORT_KEYS)}"
            )
        return value


class MessagePage(BaseModel):
    messages: list[SwiftMessage]
    total: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.messages) < self.total


class SearchResults(BaseModel):
    results: list[SwiftMessage]
    total: int
    query: str


class MessageStatistics(BaseModel):
    """Read-only snapshot of the store's running statistics."""

    model_config = ConfigDict(frozen=True)

    total_messages: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
    by_status: dict[str, int] = Field(default_factory=dict)
    average_processing_time_ms: float = 0.0
    average_response_time_ms: float = 0.0
    messages_in_memory: int = 0
    history_size: int = 0


class Timeframe(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def window(self) -> timedelta:
        return _WINDOWS[self]


_WINDOWS = {
    Timeframe.HOUR: timedelta(hours=1),
    Timeframe.DAY: timedelta(days=1),
    Timeframe.WEEK: timedelta(weeks=1),
    Timeframe.MONTH: timedelta(days=30),
}


class FlowAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeframe: Timeframe
    window_start: datetime
    total_messages: int = 0
    inbound: int = 0
    outbound: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
    by_status: dict[str, int] = Field(default_factory=dict)
    average_response_time_ms: float = 0.0
