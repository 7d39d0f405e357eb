"""ValidationReport — structured errors and warnings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..primitives.exceptions import ValidationError


def default_messages_factory() -> list[str]:
    """Factory for mutable default lists in ValidationReport fields."""
    return []


@dataclass
class ValidationReport:
    """Collects validation errors (hard) and warnings (soft).

    Only errors affect validity. Usage::

        report = ValidationReport.success("MT760")
        report.add_warning("Large guarantee amount detected, please verify")
        assert report.is_valid
    """

    message_type: str | None = None
    errors: list[str] = field(default_factory=default_messages_factory)
    warnings: list[str] = field(default_factory=default_messages_factory)
    fields_checked: int = 0

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls, message_type: str | None = None) -> ValidationReport:
        return cls(message_type=message_type)

    @classmethod
    def failure(
        cls, errors: list[str], message_type: str | None = None
    ) -> ValidationReport:
        return cls(message_type=message_type, errors=list(errors))

    # ── Merging ──────────────────────────────────────────────────

    def merge(self, other: ValidationReport) -> ValidationReport:
        """Merge another report into a new one, combining all messages."""
        return ValidationReport(
            message_type=self.message_type or other.message_type,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
            fields_checked=max(self.fields_checked, other.fields_checked),
        )

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def raise_for_errors(self) -> None:
        """Raise :class:`ValidationError` when the report carries errors."""
        if not self.is_valid:
            raise ValidationError(self.errors, self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "message_type": self.message_type,
            "fields_checked": self.fields_checked,
        }

    def __bool__(self) -> bool:
        return self.is_valid
