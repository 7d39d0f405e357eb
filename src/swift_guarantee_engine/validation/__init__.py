"""Content validation: rule tables, checks and the composite validator."""

from __future__ import annotations

from .checks import (
    BusinessRulesCheck,
    ComplianceCheck,
    FieldFormatCheck,
    RequiredFieldsCheck,
    SequenceCheck,
    ValidationContext,
)
from .result import ValidationReport
from .rules import (
    FIELD_FORMATS,
    RULE_SETS,
    VALID_CURRENCIES,
    FieldFormat,
    Severity,
    ValidationRuleSet,
    is_valid_bic,
    parse_amount,
    parse_date,
    rule_set_for,
)
from .validator import SwiftValidator, default_checks

__all__ = [
    "FIELD_FORMATS",
    "RULE_SETS",
    "VALID_CURRENCIES",
    "BusinessRulesCheck",
    "ComplianceCheck",
    "FieldFormat",
    "FieldFormatCheck",
    "RequiredFieldsCheck",
    "SequenceCheck",
    "Severity",
    "SwiftValidator",
    "ValidationContext",
    "ValidationReport",
    "ValidationRuleSet",
    "default_checks",
    "is_valid_bic",
    "parse_amount",
    "parse_date",
    "rule_set_for",
]
