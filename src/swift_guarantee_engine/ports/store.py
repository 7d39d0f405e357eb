"""IMessageStore — system-of-record protocol for guarantee messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from ..domain.enums import MessageStatus
    from ..domain.message import SwiftMessage
    from ..domain.queries import (
        FlowAnalysis,
        MessageFilter,
        MessagePage,
        MessageQuery,
        MessageStatistics,
        SearchResults,
        Timeframe,
    )


@runtime_checkable
class IMessageStore(Protocol):
    """
    Indexed, bounded store of every message the engine has seen.

    Messages are never deleted individually; ``clear`` empties the store.
    All mutations of one store are serialized.
    """

    async def store(self, message: SwiftMessage) -> SwiftMessage:
        """Persist a new message.

        Raises ``DuplicateMessageError`` when the id already exists and
        ``StructuralError`` when the record is incomplete. Neither leaves a
        partial mutation behind.
        """
        ...

    async def get(self, message_id: str) -> SwiftMessage | None: ...

    async def query(self, query: MessageQuery) -> MessagePage: ...

    async def search(
        self,
        text: str,
        message_filter: MessageFilter | None = None,
        limit: int = 50,
    ) -> SearchResults: ...

    async def by_date_range(
        self,
        start: datetime,
        end: datetime,
        message_filter: MessageFilter | None = None,
    ) -> list[SwiftMessage]: ...

    async def update_status(
        self,
        message_id: str,
        status: MessageStatus,
        note: str | None = None,
    ) -> SwiftMessage:
        """Record a status transition; ``MessageNotFoundError`` if unknown."""
        ...

    async def history(self, limit: int | None = None) -> list[SwiftMessage]: ...

    async def list_all(self) -> list[SwiftMessage]: ...

    async def clear(self) -> int: ...

    async def statistics(self) -> MessageStatistics: ...

    async def flow_analysis(self, timeframe: Timeframe | str) -> FlowAnalysis: ...
