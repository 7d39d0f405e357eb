"""MessageFactory — the single construction path for every message."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .domain.enums import Direction, MessageStatus, MessageType
from .domain.message import SwiftMessage

if TYPE_CHECKING:
    from datetime import datetime

    from .codec.codec import SwiftCodec
    from .validation.result import ValidationReport
    from .validation.validator import SwiftValidator

logger = logging.getLogger("swift_engine.factory")


def default_status(direction: Direction) -> MessageStatus:
    if direction is Direction.INCOMING:
        return MessageStatus.RECEIVED
    return MessageStatus.SENT


@dataclass(frozen=True)
class BuiltMessage:
    message: SwiftMessage
    validation: ValidationReport

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid


class MessageFactory:
    """Validates content, encodes the wire form and builds the aggregate.

    Submitted messages, generated responses and scenario steps all come
    through here, so every stored message has passed the same checks.
    An invalid message is still built, with status ``FAILED``; callers
    decide whether to persist it.
    """

    def __init__(self, validator: SwiftValidator, codec: SwiftCodec) -> None:
        self.validator = validator
        self.codec = codec

    def build(
        self,
        message_type: MessageType | str,
        content: dict[str, Any],
        *,
        sender_id: str,
        receiver_id: str,
        direction: Direction = Direction.OUTGOING,
        status: MessageStatus | None = None,
        related_message_id: str | None = None,
        is_response: bool = False,
        timestamp: datetime | None = None,
    ) -> BuiltMessage:
        mt = MessageType.parse(message_type)
        content = self.codec.normalize(content, mt)
        report = self.validator.validate(
            mt, content, sender_id=sender_id, receiver_id=receiver_id
        )
        if not report.is_valid:
            status = MessageStatus.FAILED
        extra: dict[str, Any] = {}
        if timestamp is not None:
            extra["timestamp"] = timestamp
        message = SwiftMessage(
            type=mt,
            direction=direction,
            status=status or default_status(direction),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=dict(content),
            raw_form=self.codec.encode(content, mt, sender_id, receiver_id),
            related_message_id=related_message_id,
            is_response=is_response,
            **extra,
        )
        if report.warnings:
            logger.debug(
                "Built %s %s with %d warning(s)",
                mt.value,
                message.id,
                len(report.warnings),
            )
        return BuiltMessage(message=message, validation=report)

    def revalidate(self, message: SwiftMessage) -> ValidationReport:
        return self.validator.validate(
            message.type,
            message.content,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
        )
