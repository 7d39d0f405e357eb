"""SwiftValidator — runs every content check and merges the findings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..domain.enums import MessageType
from ..primitives.exceptions import UnsupportedMessageTypeError
from .checks import (
    BusinessRulesCheck,
    ComplianceCheck,
    FieldFormatCheck,
    RequiredFieldsCheck,
    SequenceCheck,
    ValidationContext,
)
from .result import ValidationReport
from .rules import RULE_SETS, ValidationRuleSet

if TYPE_CHECKING:
    from ..ports.validation import IMessageCheck

logger = logging.getLogger("swift_engine.validation")


def default_checks() -> list[IMessageCheck]:
    return [
        RequiredFieldsCheck(),
        FieldFormatCheck(),
        BusinessRulesCheck(),
        ComplianceCheck(),
        SequenceCheck(),
    ]


class SwiftValidator:
    """Validates message content against the per-type rule sets.

    Unlike fail-fast validation, this collects **all** errors and warnings
    across all checks before returning. Content problems are reported as
    data; the validator only ever raises for programming errors.

    Usage::

        validator = SwiftValidator()
        report = validator.validate("MT760", content, sender_id="BANKGB2LXXX")
        if not report.is_valid:
            ...
    """

    def __init__(self, checks: list[IMessageCheck] | None = None) -> None:
        self._checks: list[IMessageCheck] = (
            list(checks) if checks is not None else default_checks()
        )

    def add(self, check: IMessageCheck) -> None:
        """Append a check to the chain."""
        self._checks.append(check)

    def validate(
        self,
        message_type: MessageType | str,
        content: Mapping[str, Any] | None,
        *,
        sender_id: str | None = None,
        receiver_id: str | None = None,
    ) -> ValidationReport:
        try:
            mt = MessageType.parse(message_type)
        except UnsupportedMessageTypeError as exc:
            return ValidationReport.failure([str(exc)], message_type=str(message_type))

        content = content or {}
        combined = ValidationReport(message_type=mt.value, fields_checked=len(content))
        if not isinstance(content, Mapping):
            combined.add_error("Message content must be a mapping of fields")
            return combined

        context = ValidationContext(
            rules=RULE_SETS[mt],
            content=content,
            sender_id=sender_id,
            receiver_id=receiver_id,
        )
        for check in self._checks:
            combined = combined.merge(check.check(context))

        logger.debug(
            "Validated %s: %d error(s), %d warning(s)",
            mt.value,
            len(combined.errors),
            len(combined.warnings),
        )
        return combined

    @staticmethod
    def rules_for(message_type: MessageType | str) -> ValidationRuleSet:
        return RULE_SETS[MessageType.parse(message_type)]

    @staticmethod
    def supported_types() -> list[MessageType]:
        return list(RULE_SETS)
