"""Static validation tables: per-type rule sets, formats, lengths, charsets."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable

from ..domain.enums import MessageType


@dataclass(frozen=True)
class ValidationRuleSet:
    message_type: MessageType
    name: str
    required_fields: tuple[str, ...]
    optional_fields: tuple[str, ...] = ()
    sequence: tuple[str, ...] = ()


RULE_SETS: dict[MessageType, ValidationRuleSet] = {
    MessageType.ISSUE_GUARANTEE: ValidationRuleSet(
        message_type=MessageType.ISSUE_GUARANTEE,
        name="Issue of a Guarantee",
        required_fields=(
            "transactionReference",
            "guaranteeAmount",
            "currency",
            "applicantName",
            "beneficiaryName",
        ),
        optional_fields=(
            "issueDate",
            "expiryDate",
            "guaranteeText",
            "underlyingContract",
            "applicantBIC",
            "beneficiaryBIC",
        ),
        sequence=(
            "transactionReference",
            "issueDate",
            "expiryDate",
            "guaranteeAmount",
            "applicantName",
            "beneficiaryName",
        ),
    ),
    MessageType.AMEND_GUARANTEE: ValidationRuleSet(
        message_type=MessageType.AMEND_GUARANTEE,
        name="Amendment to a Guarantee",
        required_fields=("amendmentReference", "originalReference", "amendmentType"),
        optional_fields=("newValue", "amendmentReason", "effectiveDate"),
        sequence=(
            "amendmentReference",
            "originalReference",
            "amendmentType",
            "newValue",
        ),
    ),
    MessageType.CONFIRM_AMENDMENT: ValidationRuleSet(
        message_type=MessageType.CONFIRM_AMENDMENT,
        name="Confirmation of Amendment",
        required_fields=("amendmentReference", "confirmationType"),
        optional_fields=(
            "confirmationText",
            "processedDate",
            "transactionReference",
            "originalReference",
        ),
        sequence=("amendmentReference", "confirmationType", "confirmationText"),
    ),
    MessageType.ACKNOWLEDGE: ValidationRuleSet(
        message_type=MessageType.ACKNOWLEDGE,
        name="Acknowledgment",
        required_fields=("originalReference", "acknowledgmentType"),
        optional_fields=("acknowledgmentText", "transactionReference"),
    ),
    MessageType.DISCREPANCY_ADVICE: ValidationRuleSet(
        message_type=MessageType.DISCREPANCY_ADVICE,
        name="Advice of Discrepancy",
        required_fields=("claimReference", "originalReference", "claimReason"),
        optional_fields=(
            "claimAmount",
            "currency",
            "documentsRequired",
            "processingDeadline",
        ),
        sequence=("claimReference", "originalReference", "claimAmount", "claimReason"),
    ),
    MessageType.FREE_FORMAT: ValidationRuleSet(
        message_type=MessageType.FREE_FORMAT,
        name="Free Format Message",
        required_fields=("transactionReference",),
        optional_fields=("messageText", "relatedReference"),
    ),
}


# ── Value grammars ───────────────────────────────────────────────

VALID_CURRENCIES: frozenset[str] = frozenset(
    {
        "USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD", "CNY", "INR", "BRL",
        "KRW", "SGD", "HKD", "NOK", "SEK", "DKK", "PLN", "CZK", "HUF", "RUB",
        "TRY", "ZAR", "MXN", "ARS", "CLP", "PEN", "COP", "THB", "MYR", "IDR",
        "PHP", "VND", "EGP", "MAD", "NGN", "KES", "GHS", "UGX", "TZS",
    }
)  # fmt: skip

_REFERENCE = re.compile(r"^[A-Z0-9]{1,16}$")
_AMOUNT = re.compile(r"^\d+(\.\d{1,2})?$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BIC = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
SWIFT_CHARSET = re.compile(r"^[A-Z0-9\s.,\-()/?':+]*$", re.IGNORECASE)
# Content the wire text block cannot carry.
BLOCK_DELIMITERS = re.compile(r"[{}]")
TAG_SHAPED_LINE = re.compile(r"^:\d{2}[A-Z]?:")


def is_valid_bic(value: str) -> bool:
    return bool(_BIC.match(value))


def parse_amount(value: Any) -> Decimal | None:
    """Decimal value of an amount field, ``None`` when it is not numeric."""
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def parse_date(value: Any) -> date | None:
    """Calendar date of a ``YYYY-MM-DD`` field, ``None`` when not a real date."""
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _ISO_DATE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _is_positive_amount(value: str) -> bool:
    if not _AMOUNT.match(value):
        return False
    amount = parse_amount(value)
    return amount is not None and amount > 0


# ── Field formats ────────────────────────────────────────────────


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class FieldFormat:
    """Grammar for one content field; a warning never invalidates."""

    predicate: Callable[[str], bool]
    message: str
    severity: Severity = Severity.ERROR


_AMOUNT_FORMAT = FieldFormat(
    _is_positive_amount, "Must be a positive number with up to 2 decimal places"
)
_DATE_FORMAT = FieldFormat(
    lambda value: parse_date(value) is not None, "Must be a valid date (YYYY-MM-DD)"
)
_BIC_FORMAT = FieldFormat(
    is_valid_bic, "Must be a valid BIC (8 or 11 characters)", Severity.WARNING
)

FIELD_FORMATS: dict[str, FieldFormat] = {
    "transactionReference": FieldFormat(
        lambda value: bool(_REFERENCE.match(value)),
        "Must be 1-16 alphanumeric characters",
    ),
    "guaranteeAmount": _AMOUNT_FORMAT,
    "claimAmount": _AMOUNT_FORMAT,
    "currency": FieldFormat(
        lambda value: value in VALID_CURRENCIES,
        "Must be a valid 3-letter ISO currency code",
    ),
    "issueDate": _DATE_FORMAT,
    "expiryDate": _DATE_FORMAT,
    "effectiveDate": _DATE_FORMAT,
    "processedDate": _DATE_FORMAT,
    "processingDeadline": _DATE_FORMAT,
    "applicantBIC": _BIC_FORMAT,
    "beneficiaryBIC": _BIC_FORMAT,
}


# ── Length limits ────────────────────────────────────────────────

MAX_FIELD_LENGTHS: dict[str, int] = {
    "transactionReference": 16,
    "amendmentReference": 16,
    "originalReference": 16,
    "relatedReference": 16,
    "claimReference": 16,
    "guaranteeText": 780,
    "amendmentReason": 780,
    "claimReason": 780,
    "applicantName": 140,
    "beneficiaryName": 140,
}

EXACT_FIELD_LENGTHS: dict[str, int] = {"currency": 3}


# ── Business constants ───────────────────────────────────────────

LARGE_AMOUNT_THRESHOLD = Decimal("10000000")
MAX_VALIDITY_YEARS = 10
MIN_CLAIM_REASON_LENGTH = 10

STANDARD_AMENDMENT_TYPES: frozenset[str] = frozenset(
    {
        "AMOUNT_INCREASE",
        "AMOUNT_DECREASE",
        "EXPIRY_EXTENSION",
        "EXPIRY_REDUCTION",
        "TEXT_AMENDMENT",
    }
)
AMOUNT_AMENDMENT_TYPES: frozenset[str] = frozenset(
    {"AMOUNT_INCREASE", "AMOUNT_DECREASE"}
)
EXPIRY_AMENDMENT_TYPES: frozenset[str] = frozenset(
    {"EXPIRY_EXTENSION", "EXPIRY_REDUCTION"}
)
CONFIRMATION_TYPES: frozenset[str] = frozenset({"ACCEPTED", "REJECTED", "PARTIAL"})


def rule_set_for(message_type: MessageType) -> ValidationRuleSet:
    return RULE_SETS[message_type]
