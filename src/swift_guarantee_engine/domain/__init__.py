"""Domain layer: message aggregate, enumerations and events."""

from __future__ import annotations

from .enums import Direction, MessageStatus, MessageType, ThreadStatus
from .events import (
    MessageEvent,
    MessagesCleared,
    MessageStatusChanged,
    MessageStored,
    enrich_event,
)
from .message import (
    LINK_REFERENCE_FIELDS,
    OWN_REFERENCE_FIELDS,
    PRIMARY_REFERENCE_FIELDS,
    StatusTransition,
    SwiftMessage,
)
from .queries import (
    SORT_KEYS,
    FlowAnalysis,
    MessageFilter,
    MessagePage,
    MessageQuery,
    MessageStatistics,
    SearchResults,
    Timeframe,
)

__all__ = [
    "LINK_REFERENCE_FIELDS",
    "OWN_REFERENCE_FIELDS",
    "PRIMARY_REFERENCE_FIELDS",
    "SORT_KEYS",
    "Direction",
    "FlowAnalysis",
    "MessageEvent",
    "MessageFilter",
    "MessagePage",
    "MessageQuery",
    "MessageStatistics",
    "MessageStatus",
    "MessageStatusChanged",
    "MessageStored",
    "MessageType",
    "MessagesCleared",
    "SearchResults",
    "StatusTransition",
    "SwiftMessage",
    "ThreadStatus",
    "Timeframe",
    "enrich_event",
]
