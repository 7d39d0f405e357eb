"""Automatic response rules: which reply each message type earns."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.enums import MessageType


@dataclass(frozen=True)
class ResponseRule:
    original_type: MessageType
    response_type: MessageType
    delay_ms: int
    disposition_field: str
    disposition: str
    text_field: str
    text: str

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


RESPONSE_RULES: dict[MessageType, ResponseRule] = {
    rule.original_type: rule
    for rule in (
        ResponseRule(
            original_type=MessageType.ISSUE_GUARANTEE,
            response_type=MessageType.ACKNOWLEDGE,
            delay_ms=2000,
            disposition_field="acknowledgmentType",
            disposition="RECEIVED",
            text_field="acknowledgmentText",
            text="Guarantee received and processed",
        ),
        ResponseRule(
            original_type=MessageType.AMEND_GUARANTEE,
            response_type=MessageType.CONFIRM_AMENDMENT,
            delay_ms=5000,
            disposition_field="confirmationType",
            disposition="ACCEPTED",
            text_field="confirmationText",
            text="Amendment accepted",
        ),
        ResponseRule(
            original_type=MessageType.CONFIRM_AMENDMENT,
            response_type=MessageType.ACKNOWLEDGE,
            delay_ms=1000,
            disposition_field="acknowledgmentType",
            disposition="RECEIVED",
            text_field="acknowledgmentText",
            text="Amendment confirmation received",
        ),
        ResponseRule(
            original_type=MessageType.DISCREPANCY_ADVICE,
            response_type=MessageType.ACKNOWLEDGE,
            delay_ms=3000,
            disposition_field="acknowledgmentType",
            disposition="RECEIVED",
            text_field="acknowledgmentText",
            text="Claim received and under review",
        ),
    )
}
