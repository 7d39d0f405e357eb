"""ResponseGenerator — builds the counterparty's automatic reply."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..domain.enums import Direction, MessageStatus, MessageType
from ..domain.message import SwiftMessage
from ..primitives.id_generator import ReferenceGenerator
from .rules import RESPONSE_RULES, ResponseRule

if TYPE_CHECKING:
    from ..codec.codec import SwiftCodec

logger = logging.getLogger("swift_engine.responses")

RESPONSE_REFERENCE_PREFIX = "RSP"


class ResponseGenerator:
    """Derives a reply from an original message using :data:`RESPONSE_RULES`.

    The reply's type, linkage and field values are fully determined by the
    original; only its reference, id and timestamp vary between calls.
    """

    def __init__(
        self,
        codec: SwiftCodec,
        references: ReferenceGenerator | None = None,
        rules: dict[MessageType, ResponseRule] | None = None,
    ) -> None:
        self._codec = codec
        self._references = references or ReferenceGenerator()
        self._rules = rules if rules is not None else RESPONSE_RULES

    def rule_for(self, message_type: MessageType) -> ResponseRule | None:
        return self._rules.get(message_type)

    def delay_for(self, message_type: MessageType) -> int | None:
        """Rule delay in milliseconds, ``None`` for types without a reply."""
        rule = self.rule_for(message_type)
        return rule.delay_ms if rule else None

    def generate_response(self, original: SwiftMessage) -> SwiftMessage | None:
        rule = self.rule_for(original.type)
        if rule is None:
            return None

        content = self._response_content(original, rule)
        direction = original.direction.reversed()
        status = (
            MessageStatus.RECEIVED
            if direction is Direction.INCOMING
            else MessageStatus.SENT
        )
        response = SwiftMessage(
            type=rule.response_type,
            direction=direction,
            status=status,
            sender_id=original.receiver_id,
            receiver_id=original.sender_id,
            content=content,
            raw_form=self._codec.encode(
                content,
                rule.response_type,
                original.receiver_id,
                original.sender_id,
            ),
            related_message_id=original.id,
            is_response=True,
        )
        logger.debug(
            "Generated %s reply %s for %s %s",
            rule.response_type.value,
            response.id,
            original.type.value,
            original.id,
        )
        return response

    def _response_content(
        self, original: SwiftMessage, rule: ResponseRule
    ) -> dict[str, Any]:
        content: dict[str, Any] = {
            "transactionReference": self._references.next_reference(
                RESPONSE_REFERENCE_PREFIX
            ),
        }
        reference = original.primary_reference
        if reference:
            content["originalReference"] = reference
        if rule.response_type is MessageType.CONFIRM_AMENDMENT:
            amendment = original.field_text("amendmentReference")
            if amendment:
                content["amendmentReference"] = amendment
        content[rule.disposition_field] = rule.disposition
        content[rule.text_field] = rule.text
        return content
