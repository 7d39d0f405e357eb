"""CorrelationEngine — groups messages into business conversations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..primitives.exceptions import MessageNotFoundError
from .thread import MessageThread

if TYPE_CHECKING:
    from ..domain.message import SwiftMessage
    from ..ports.store import IMessageStore

logger = logging.getLogger("swift_engine.correlation")


def are_related(first: SwiftMessage, second: SwiftMessage) -> bool:
    """Whether two distinct messages belong to the same conversation.

    Related when either back-references the other, when they share an own
    business reference, or when one links to the other's own reference.
    The relation is symmetric and only one hop deep.
    """
    if first.id == second.id:
        return False
    if first.id == second.related_message_id or second.id == first.related_message_id:
        return True
    first_own = first.own_references
    second_own = second.own_references
    if first_own & second_own:
        return True
    return bool(first.link_references & second_own) or bool(
        second.link_references & first_own
    )


class CorrelationEngine:
    """Recomputes relations by scanning the store on every call.

    Side-effect free: nothing about a relation is persisted.
    """

    def __init__(self, store: IMessageStore) -> None:
        self._store = store

    async def _require(self, message_id: str) -> SwiftMessage:
        message = await self._store.get(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return message

    async def related_messages(self, message_id: str) -> list[SwiftMessage]:
        """The conversation around *message_id*, itself included, oldest first."""
        message = await self._require(message_id)
        candidates = await self._store.list_all()
        related = [
            other
            for other in candidates
            if other.id == message.id or are_related(message, other)
        ]
        related.sort(key=lambda m: m.timestamp)
        logger.debug(
            "Found %d message(s) related to %s", len(related) - 1, message_id
        )
        return related

    async def build_thread(self, message_id: str) -> MessageThread:
        return MessageThread.from_messages(await self.related_messages(message_id))
