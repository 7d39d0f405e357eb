"""Static scenario scripts.

Each script is an ordered tuple of steps. A step knows its offset from the
start of the scenario, the message type and direction it produces, how to
build that message's content, and optionally which earlier step it replies
to.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from ..domain.enums import Direction, MessageType
from .parameters import (
    AmendmentParameters,
    ClaimParameters,
    DiscrepancyParameters,
    ExpiryParameters,
    IssuanceParameters,
    ScenarioParameters,
)

if TYPE_CHECKING:
    from ..domain.message import SwiftMessage
    from ..primitives.id_generator import ReferenceGenerator

P = TypeVar("P", bound=ScenarioParameters)


@dataclass(frozen=True)
class StepContext(Generic[P]):
    """What a content builder can see while a scenario runs."""

    parameters: P
    references: ReferenceGenerator
    today: date
    previous: list[SwiftMessage]

    def reply_to(self, index: int) -> SwiftMessage:
        return self.previous[index]


@dataclass(frozen=True)
class ScenarioStep(Generic[P]):
    offset_ms: int
    message_type: MessageType
    direction: Direction
    action: str
    build_content: Callable[[StepContext[P]], dict[str, Any]]
    reply_to: int | None = None


@dataclass(frozen=True)
class ScenarioDefinition(Generic[P]):
    name: str
    description: str
    parameters_model: type[P]
    steps: tuple[ScenarioStep[P], ...]
    final_status: str


def _amount(value: Decimal) -> str:
    return format(value, "f")


# ── guarantee-issuance ───────────────────────────────────────────


def _issue(ctx: StepContext[IssuanceParameters]) -> dict[str, Any]:
    params = ctx.parameters
    return {
        "transactionReference": ctx.references.next_reference("GTR"),
        "issueDate": ctx.today.isoformat(),
        "expiryDate": (ctx.today + timedelta(days=params.validity_days)).isoformat(),
        "guaranteeAmount": _amount(params.guarantee_amount),
        "currency": params.currency,
        "applicantName": params.applicant_name,
        "beneficiaryName": params.beneficiary_name,
        "guaranteeText": params.guarantee_text,
    }


def _acknowledge(text: str) -> Callable[[StepContext[Any]], dict[str, Any]]:
    def build(ctx: StepContext[Any]) -> dict[str, Any]:
        original = ctx.reply_to(0)
        return {
            "transactionReference": ctx.references.next_reference("ACK"),
            "originalReference": original.primary_reference,
            "acknowledgmentType": "RECEIVED",
            "acknowledgmentText": text,
        }

    return build


GUARANTEE_ISSUANCE: ScenarioDefinition[IssuanceParameters] = ScenarioDefinition(
    name="guarantee-issuance",
    description="Issue a guarantee and receive the beneficiary bank's acknowledgment",
    parameters_model=IssuanceParameters,
    steps=(
        ScenarioStep(
            0,
            MessageType.ISSUE_GUARANTEE,
            Direction.OUTGOING,
            "MT760 sent - Guarantee issued",
            _issue,
        ),
        ScenarioStep(
            2000,
            MessageType.ACKNOWLEDGE,
            Direction.INCOMING,
            "MT768 received - Acknowledgment",
            _acknowledge("Guarantee received and acknowledged"),
            reply_to=0,
        ),
    ),
    final_status="COMPLETED",
)


# ── guarantee-amendment ──────────────────────────────────────────


def _amend(ctx: StepContext[AmendmentParameters]) -> dict[str, Any]:
    params = ctx.parameters
    return {
        "amendmentReference": ctx.references.next_reference("AMD"),
        "originalReference": params.original_reference,
        "amendmentType": params.amendment_type,
        "newValue": params.new_value,
        "amendmentReason": params.amendment_reason,
    }


def _confirm(ctx: StepContext[AmendmentParameters]) -> dict[str, Any]:
    amendment = ctx.reply_to(0)
    return {
        "amendmentReference": amendment.field_text("amendmentReference"),
        "originalReference": ctx.parameters.original_reference,
        "confirmationType": "ACCEPTED",
        "confirmationText": "Amendment accepted and processed",
    }


GUARANTEE_AMENDMENT: ScenarioDefinition[AmendmentParameters] = ScenarioDefinition(
    name="guarantee-amendment",
    description="Request an amendment and receive its confirmation",
    parameters_model=AmendmentParameters,
    steps=(
        ScenarioStep(
            0,
            MessageType.AMEND_GUARANTEE,
            Direction.OUTGOING,
            "MT765 sent - Amendment request",
            _amend,
        ),
        ScenarioStep(
            5000,
            MessageType.CONFIRM_AMENDMENT,
            Direction.INCOMING,
            "MT767 received - Amendment confirmed",
            _confirm,
            reply_to=0,
        ),
    ),
    final_status="COMPLETED",
)


# ── claim-process ────────────────────────────────────────────────


def _claim(ctx: StepContext[ClaimParameters]) -> dict[str, Any]:
    params = ctx.parameters
    content: dict[str, Any] = {
        "claimReference": ctx.references.next_reference("CLM"),
        "originalReference": params.guarantee_reference,
    }
    if params.claim_amount is not None:
        content["claimAmount"] = _amount(params.claim_amount)
        content["currency"] = params.currency
    content["claimReason"] = params.claim_reason
    content["documentsRequired"] = list(params.documents_required)
    return content


CLAIM_PROCESS: ScenarioDefinition[ClaimParameters] = ScenarioDefinition(
    name="claim-process",
    description="Receive a claim against a guarantee",
    parameters_model=ClaimParameters,
    steps=(
        ScenarioStep(
            0,
            MessageType.DISCREPANCY_ADVICE,
            Direction.INCOMING,
            "MT769 received - Claim submitted",
            _claim,
        ),
    ),
    final_status="PENDING_REVIEW",
)


# ── discrepancy-handling ─────────────────────────────────────────


def _discrepancy(ctx: StepContext[DiscrepancyParameters]) -> dict[str, Any]:
    params = ctx.parameters
    content: dict[str, Any] = {
        "claimReference": ctx.references.next_reference("DSC"),
        "originalReference": params.guarantee_reference,
    }
    if params.claim_amount is not None:
        content["claimAmount"] = _amount(params.claim_amount)
        content["currency"] = params.currency
    content["claimReason"] = params.discrepancy_reason
    return content


DISCREPANCY_HANDLING: ScenarioDefinition[DiscrepancyParameters] = ScenarioDefinition(
    name="discrepancy-handling",
    description="Receive a discrepancy advice and acknowledge it",
    parameters_model=DiscrepancyParameters,
    steps=(
        ScenarioStep(
            0,
            MessageType.DISCREPANCY_ADVICE,
            Direction.INCOMING,
            "MT769 received - Discrepancy advised",
            _discrepancy,
        ),
        ScenarioStep(
            3000,
            MessageType.ACKNOWLEDGE,
            Direction.OUTGOING,
            "MT768 sent - Discrepancy acknowledged",
            _acknowledge("Discrepancy received and under review"),
            reply_to=0,
        ),
    ),
    final_status="ACKNOWLEDGED",
)


# ── guarantee-expiry ─────────────────────────────────────────────


def _expiry_notice(ctx: StepContext[ExpiryParameters]) -> dict[str, Any]:
    params = ctx.parameters
    expired_on = params.expiry_date or ctx.today
    return {
        "transactionReference": ctx.references.next_reference("EXP"),
        "relatedReference": params.guarantee_reference,
        "messageText": (
            f"Guarantee {params.guarantee_reference} expired on "
            f"{expired_on.isoformat()}"
        ),
    }


GUARANTEE_EXPIRY: ScenarioDefinition[ExpiryParameters] = ScenarioDefinition(
    name="guarantee-expiry",
    description="Notify the beneficiary bank of expiry and receive its acknowledgment",
    parameters_model=ExpiryParameters,
    steps=(
        ScenarioStep(
            0,
            MessageType.FREE_FORMAT,
            Direction.OUTGOING,
            "MT798 sent - Expiry notice",
            _expiry_notice,
        ),
        ScenarioStep(
            2000,
            MessageType.ACKNOWLEDGE,
            Direction.INCOMING,
            "MT768 received - Expiry acknowledged",
            _acknowledge("Expiry notice received"),
            reply_to=0,
        ),
    ),
    final_status="EXPIRED",
)


SCENARIOS: dict[str, ScenarioDefinition[Any]] = {
    definition.name: definition
    for definition in (
        GUARANTEE_ISSUANCE,
        GUARANTEE_AMENDMENT,
        CLAIM_PROCESS,
        DISCREPANCY_HANDLING,
        GUARANTEE_EXPIRY,
    )
}
