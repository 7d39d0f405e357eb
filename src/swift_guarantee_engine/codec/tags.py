"""Per-type field tag tables and message templates.

The tag numbers for reference (20), related reference (21), issue date (31C),
expiry date (31E), amount and currency (32B), applicant (50), beneficiary (59)
and free text (77C) are part of the interoperable wire contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..domain.enums import MessageType


class FieldKind(str, Enum):
    REFERENCE = "reference"
    CODE = "code"
    DATE = "date"
    AMOUNT = "amount"
    NAME = "name"
    TEXT = "text"


@dataclass(frozen=True)
class FieldSpec:
    """Maps one colon-tagged wire field to a semantic content field."""

    tag: str
    name: str
    kind: FieldKind


# Content field carrying the currency of any AMOUNT field (tag 32B).
CURRENCY_FIELD = "currency"

_REF = FieldKind.REFERENCE
_CODE = FieldKind.CODE
_DATE = FieldKind.DATE
_AMOUNT = FieldKind.AMOUNT
_NAME = FieldKind.NAME
_TEXT = FieldKind.TEXT

CANONICAL_FIELDS: dict[MessageType, tuple[FieldSpec, ...]] = {
    MessageType.ISSUE_GUARANTEE: (
        FieldSpec("20", "transactionReference", _REF),
        FieldSpec("21", "relatedReference", _REF),
        FieldSpec("31C", "issueDate", _DATE),
        FieldSpec("31E", "expiryDate", _DATE),
        FieldSpec("32B", "guaranteeAmount", _AMOUNT),
        FieldSpec("50", "applicantName", _NAME),
        FieldSpec("59", "beneficiaryName", _NAME),
        FieldSpec("77C", "guaranteeText", _TEXT),
    ),
    MessageType.AMEND_GUARANTEE: (
        FieldSpec("20", "amendmentReference", _REF),
        FieldSpec("21", "originalReference", _REF),
        FieldSpec("23", "amendmentType", _CODE),
        FieldSpec("31C", "effectiveDate", _DATE),
        FieldSpec("77A", "newValue", _TEXT),
        FieldSpec("77C", "amendmentReason", _TEXT),
    ),
    MessageType.CONFIRM_AMENDMENT: (
        FieldSpec("20", "transactionReference", _REF),
        FieldSpec("21", "originalReference", _REF),
        FieldSpec("26E", "amendmentReference", _REF),
        FieldSpec("23", "confirmationType", _CODE),
        FieldSpec("31C", "processedDate", _DATE),
        FieldSpec("77C", "confirmationText", _TEXT),
    ),
    MessageType.ACKNOWLEDGE: (
        FieldSpec("20", "transactionReference", _REF),
        FieldSpec("21", "originalReference", _REF),
        FieldSpec("23", "acknowledgmentType", _CODE),
        FieldSpec("77C", "acknowledgmentText", _TEXT),
    ),
    MessageType.DISCREPANCY_ADVICE: (
        FieldSpec("20", "claimReference", _REF),
        FieldSpec("21", "originalReference", _REF),
        FieldSpec("31C", "processingDeadline", _DATE),
        FieldSpec("32B", "claimAmount", _AMOUNT),
        FieldSpec("77C", "claimReason", _TEXT),
    ),
    MessageType.FREE_FORMAT: (
        FieldSpec("20", "transactionReference", _REF),
        FieldSpec("21", "relatedReference", _REF),
        FieldSpec("77C", "messageText", _TEXT),
    ),
}


def field_specs(message_type: MessageType) -> tuple[FieldSpec, ...]:
    return CANONICAL_FIELDS[message_type]


def canonical_field_names(message_type: MessageType) -> list[str]:
    """Content fields a type round-trips through the wire form."""
    names: list[str] = []
    for spec in CANONICAL_FIELDS[message_type]:
        names.append(spec.name)
        if spec.kind is FieldKind.AMOUNT:
            names.append(CURRENCY_FIELD)
    return names


_DESCRIPTIONS = {
    MessageType.ISSUE_GUARANTEE: "Used to issue a new guarantee",
    MessageType.AMEND_GUARANTEE: "Used to request amendment to existing guarantee",
    MessageType.CONFIRM_AMENDMENT: "Confirmation of guarantee amendment",
    MessageType.ACKNOWLEDGE: "Acknowledgment of received message",
    MessageType.DISCREPANCY_ADVICE: "Advice of discrepancy or claim",
    MessageType.FREE_FORMAT: "Free format proprietary message",
}


@dataclass(frozen=True)
class MessageTemplate:
    message_type: MessageType
    name: str
    description: str
    tags: tuple[str, ...]
    fields: tuple[str, ...]


def message_templates() -> dict[str, MessageTemplate]:
    """Describe every supported message type, keyed by its MT name."""
    return {
        message_type.value: MessageTemplate(
            message_type=message_type,
            name=message_type.title,
            description=_DESCRIPTIONS[message_type],
            tags=tuple(spec.tag for spec in specs),
            fields=tuple(canonical_field_names(message_type)),
        )
        for message_type, specs in CANONICAL_FIELDS.items()
    }
