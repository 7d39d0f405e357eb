"""Commands — immutable intents to change engine state."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import MessageStatus
from ..tracing import get_correlation_id


class Command(BaseModel):
    """
    Base for all commands.

    The ``correlation_id`` is inherited from the current context (see
    :func:`~swift_guarantee_engine.tracing.get_correlation_id`). When none
    is active it stays ``None`` until the correlation middleware assigns one.
    """

    model_config = ConfigDict(frozen=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)


class SubmitMessage(Command):
    message_type: str
    sender_id: str
    receiver_id: str
    content: dict[str, Any] = Field(default_factory=dict)


class ReceiveMessage(Command):
    raw_message: str
    sender_id: str | None = None


class UpdateMessageStatus(Command):
    message_id: str
    status: MessageStatus
    note: str | None = None


class RunScenario(Command):
    name: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class ClearMessages(Command):
    pass
