"""Individual validation checks composed by :class:`SwiftValidator`.

Each check reads a :class:`ValidationContext` and returns its own
:class:`ValidationReport`; none of them raise for content problems.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..domain.enums import MessageType
from .result import ValidationReport
from .rules import (
    AMOUNT_AMENDMENT_TYPES,
    BLOCK_DELIMITERS,
    CONFIRMATION_TYPES,
    EXACT_FIELD_LENGTHS,
    EXPIRY_AMENDMENT_TYPES,
    FIELD_FORMATS,
    LARGE_AMOUNT_THRESHOLD,
    MAX_FIELD_LENGTHS,
    MAX_VALIDITY_YEARS,
    MIN_CLAIM_REASON_LENGTH,
    STANDARD_AMENDMENT_TYPES,
    SWIFT_CHARSET,
    TAG_SHAPED_LINE,
    Severity,
    ValidationRuleSet,
    is_valid_bic,
    parse_amount,
    parse_date,
)


@dataclass(frozen=True)
class ValidationContext:
    rules: ValidationRuleSet
    content: Mapping[str, Any]
    sender_id: str | None = None
    receiver_id: str | None = None

    @property
    def message_type(self) -> MessageType:
        return self.rules.message_type

    def text(self, name: str) -> str | None:
        """Stripped string form of a field, ``None`` when absent or blank."""
        value = self.content.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(str(item) for item in value).strip() or None
        return str(value).strip() or None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return not str(value).strip()


class RequiredFieldsCheck:
    def check(self, context: ValidationContext) -> ValidationReport:
        report = ValidationReport.success(context.message_type.value)
        for name in context.rules.required_fields:
            if _is_blank(context.content.get(name)):
                report.add_error(f"Missing required field: {name}")
        return report


class FieldFormatCheck:
    def check(self, context: ValidationContext) -> ValidationReport:
        report = ValidationReport.success(context.message_type.value)
        for name in context.content:
            fmt = FIELD_FORMATS.get(name)
            value = context.text(name)
            if fmt is None or value is None or fmt.predicate(value):
                continue
            if fmt.severity is Severity.ERROR:
                report.add_error(f"Invalid format for field {name}: {fmt.message}")
            else:
                report.add_warning(f"Format warning for field {name}: {fmt.message}")
        return report


# ── Business rules ───────────────────────────────────────────────


def _issue_rules(context: ValidationContext, report: ValidationReport) -> None:
    raw_amount = context.text("guaranteeAmount")
    amount = parse_amount(raw_amount) if raw_amount else None
    if amount is not None:
        if amount <= 0:
            report.add_error("Guarantee amount must be greater than zero")
        elif amount > LARGE_AMOUNT_THRESHOLD:
            report.add_warning("Large guarantee amount detected, please verify")

    issue_text = context.text("issueDate")
    expiry_text = context.text("expiryDate")
    issue = parse_date(issue_text) if issue_text else None
    expiry = parse_date(expiry_text) if expiry_text else None
    if issue is not None and expiry is not None:
        if expiry <= issue:
            report.add_error("Expiry date must be after issue date")
        elif (expiry - issue).days / 365 > MAX_VALIDITY_YEARS:
            report.add_warning(
                f"Guarantee validity period exceeds {MAX_VALIDITY_YEARS} years"
            )

    if context.sender_id and not is_valid_bic(context.sender_id):
        report.add_warning(f"Sender BIC {context.sender_id} has an invalid format")
    if context.receiver_id and not is_valid_bic(context.receiver_id):
        report.add_warning(f"Receiver BIC {context.receiver_id} has an invalid format")


def _amendment_rules(context: ValidationContext, report: ValidationReport) -> None:
    if not context.text("amendmentReference"):
        report.add_error("Amendment reference is required for MT765")
    if not context.text("originalReference"):
        report.add_error("Original guarantee reference is required for amendments")

    amendment_type = context.text("amendmentType")
    if amendment_type is None:
        return
    if amendment_type not in STANDARD_AMENDMENT_TYPES:
        report.add_warning(f"Non-standard amendment type: {amendment_type}")

    new_value = context.text("newValue")
    if amendment_type in AMOUNT_AMENDMENT_TYPES:
        amount = parse_amount(new_value) if new_value else None
        if amount is None or amount <= 0:
            report.add_error("Amount amendments require a positive numeric new value")
    elif amendment_type in EXPIRY_AMENDMENT_TYPES:
        if not new_value or parse_date(new_value) is None:
            report.add_error("Expiry amendments require a valid new expiry date")


def _confirmation_rules(context: ValidationContext, report: ValidationReport) -> None:
    if not context.text("amendmentReference") and not context.text(
        "originalReference"
    ):
        report.add_error("Either amendment reference or original reference is required")
    confirmation_type = context.text("confirmationType")
    if confirmation_type and confirmation_type not in CONFIRMATION_TYPES:
        report.add_warning(f"Non-standard confirmation type: {confirmation_type}")


def _claim_rules(context: ValidationContext, report: ValidationReport) -> None:
    raw_amount = context.text("claimAmount")
    amount = parse_amount(raw_amount) if raw_amount else None
    if amount is not None and amount <= 0:
        report.add_error("Claim amount must be greater than zero")
    reason = context.text("claimReason")
    if not reason or len(reason) < MIN_CLAIM_REASON_LENGTH:
        report.add_error(
            "Detailed claim reason is required "
            f"(minimum {MIN_CLAIM_REASON_LENGTH} characters)"
        )
    if not context.text("originalReference"):
        report.add_error("Original guarantee reference is required for claims")


BUSINESS_RULES: dict[
    MessageType, Callable[[ValidationContext, ValidationReport], None]
] = {
    MessageType.ISSUE_GUARANTEE: _issue_rules,
    MessageType.AMEND_GUARANTEE: _amendment_rules,
    MessageType.CONFIRM_AMENDMENT: _confirmation_rules,
    MessageType.DISCREPANCY_ADVICE: _claim_rules,
}


class BusinessRulesCheck:
    def check(self, context: ValidationContext) -> ValidationReport:
        report = ValidationReport.success(context.message_type.value)
        rules = BUSINESS_RULES.get(context.message_type)
        if rules is not None:
            rules(context, report)
        return report


# ── Compliance ───────────────────────────────────────────────────


def _has_tag_shaped_continuation(text: str) -> bool:
    return any(TAG_SHAPED_LINE.match(line) for line in text.splitlines()[1:])


class ComplianceCheck:
    """Field lengths and wire-breaking text (errors), SWIFT charset (warnings)."""

    def check(self, context: ValidationContext) -> ValidationReport:
        report = ValidationReport.success(context.message_type.value)
        for name, value in context.content.items():
            if value is None:
                continue
            items = value if isinstance(value, (list, tuple)) else [value]
            texts = [str(item) for item in items]

            limit = MAX_FIELD_LENGTHS.get(name)
            if limit is not None and any(len(text) > limit for text in texts):
                report.add_error(
                    f"Field {name} exceeds maximum length of {limit} characters"
                )
            exact = EXACT_FIELD_LENGTHS.get(name)
            if exact is not None and any(len(text) != exact for text in texts):
                report.add_error(f"Field {name} must be exactly {exact} characters")
            if any(BLOCK_DELIMITERS.search(text) for text in texts):
                report.add_error(f"Field {name} contains block delimiters {{ or }}")
            if any(_has_tag_shaped_continuation(text) for text in texts):
                report.add_error(
                    f"Field {name} has a continuation line that reads as a field tag"
                )

            if not all(SWIFT_CHARSET.match(text) for text in texts):
                report.add_warning(
                    f"Field {name} contains non-SWIFT compliant characters"
                )
        return report


class SequenceCheck:
    """Warn when present fields appear out of their canonical order."""

    def check(self, context: ValidationContext) -> ValidationReport:
        report = ValidationReport.success(context.message_type.value)
        keys = list(context.content)
        cursor = 0
        for name in context.rules.sequence:
            if _is_blank(context.content.get(name)):
                continue
            position = keys.index(name)
            if position < cursor:
                report.add_warning(f"Field {name} appears out of expected sequence")
            cursor = max(cursor, position + 1)
        return report
