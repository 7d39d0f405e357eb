"""MessageThread — derived view of one business conversation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..domain.enums import MessageType, ThreadStatus
from ..domain.message import SwiftMessage

_STATUS_BY_LAST_TYPE = {
    MessageType.ACKNOWLEDGE: ThreadStatus.ACKNOWLEDGED,
    MessageType.CONFIRM_AMENDMENT: ThreadStatus.CONFIRMED,
    MessageType.DISCREPANCY_ADVICE: ThreadStatus.DISPUTED,
}


def derive_thread_status(messages: list[SwiftMessage]) -> ThreadStatus:
    """Status of a thread ordered by timestamp, judged by its last message."""
    if not messages:
        return ThreadStatus.EMPTY
    if len(messages) == 1:
        return ThreadStatus.PENDING
    return _STATUS_BY_LAST_TYPE.get(messages[-1].type, ThreadStatus.IN_PROGRESS)


class MessageThread(BaseModel):
    root_message: SwiftMessage
    responses: list[SwiftMessage] = Field(default_factory=list)
    message_count: int
    thread_status: ThreadStatus
    last_activity: datetime

    @property
    def messages(self) -> list[SwiftMessage]:
        return [self.root_message, *self.responses]

    @classmethod
    def from_messages(cls, messages: list[SwiftMessage]) -> MessageThread:
        """Build a thread from messages already ordered by timestamp."""
        root, *responses = messages
        return cls(
            root_message=root,
            responses=responses,
            message_count=len(messages),
            thread_status=derive_thread_status(messages),
            last_activity=messages[-1].timestamp,
        )
