"""Message correlation: related-message discovery and thread views."""

from __future__ import annotations

from swift_guarantee_engine.correlation.engine import CorrelationEngine, are_related
from .thread import MessageThread, derive_thread_status

__all__ = [
    "CorrelationEngine",
    "MessageThread",
    "are_related",
    "derive_thread_status",
]
