"""Runtime parameters accepted by each scenario."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..validation.rules import VALID_CURRENCIES


class ScenarioParameters(BaseModel):
    """Base model; unknown keys are rejected so typos surface early."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    counterparty_bic: str | None = Field(
        default=None, description="Overrides the configured counterparty BIC"
    )


class _CurrencyParameters(ScenarioParameters):
    currency: str = "USD"

    @field_validator("currency")
    @classmethod
    def _known_currency(cls, value: str) -> str:
        value = value.upper()
        if value not in VALID_CURRENCIES:
            raise ValueError(f"unsupported currency {value!r}")
        return value


class IssuanceParameters(_CurrencyParameters):
    guarantee_amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        validation_alias=AliasChoices("guarantee_amount", "amount"),
    )
    applicant_name: str = Field(
        default="Simulated Applicant Ltd", min_length=1, max_length=140
    )
    beneficiary_name: str = Field(
        default="Simulated Beneficiary Ltd", min_length=1, max_length=140
    )
    validity_days: int = Field(default=365, ge=1)
    guarantee_text: str = "Performance Guarantee as per contract terms"


class AmendmentParameters(ScenarioParameters):
    original_reference: str = Field(..., min_length=1, max_length=16)
    amendment_type: str = "AMOUNT_INCREASE"
    new_value: str = Field(..., min_length=1)
    amendment_reason: str = "Contract modification as requested"


class ClaimParameters(_CurrencyParameters):
    guarantee_reference: str = Field(..., min_length=1, max_length=16)
    claim_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    claim_reason: str = Field(..., min_length=1)
    documents_required: list[str] = Field(
        default_factory=lambda: ["Invoice", "Delivery Receipt", "Contract"]
    )


class DiscrepancyParameters(_CurrencyParameters):
    guarantee_reference: str = Field(..., min_length=1, max_length=16)
    claim_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    discrepancy_reason: str = "Documents presented contain discrepancies"


class ExpiryParameters(ScenarioParameters):
    guarantee_reference: str = Field(..., min_length=1, max_length=16)
    expiry_date: date | None = None
