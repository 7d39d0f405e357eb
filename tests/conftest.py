from __future__ import annotations

from typing import Any, Callable

import pytest

from swift_guarantee_engine.codec import SwiftCodec
from swift_guarantee_engine.domain import (
    Direction,
    MessageStatus,
    MessageType,
    SwiftMessage,
)
from swift_guarantee_engine.engine import SwiftMessagingEngine
from swift_guarantee_engine.settings import EngineSettings
from swift_guarantee_engine.validation import SwiftValidator

INSTITUTION_BIC = "INTXGB2LXXX"
COUNTERPARTY_BIC = "BNKSSGSGXXX"


@pytest.fixture
def issue_content() -> dict[str, Any]:
    """A complete, warning-free MT760 in canonical field order."""
    return {
        "transactionReference": "GTR2024000001",
        "issueDate": "2024-01-15",
        "expiryDate": "2025-01-15",
        "guaranteeAmount": "100000.00",
        "currency": "USD",
        "applicantName": "ACME Trading Ltd",
        "beneficiaryName": "Global Supplies Inc",
        "guaranteeText": "Performance guarantee for contract 42",
    }


@pytest.fixture
def amendment_content() -> dict[str, Any]:
    return {
        "amendmentReference": "AMD2024000001",
        "originalReference": "GTR2024000001",
        "amendmentType": "AMOUNT_INCREASE",
        "newValue": "150000.00",
        "amendmentReason": "Contract value increased",
    }


@pytest.fixture
def claim_content() -> dict[str, Any]:
    return {
        "claimReference": "CLM2024000001",
        "originalReference": "GTR2024000001",
        "claimAmount": "25000.00",
        "currency": "USD",
        "claimReason": "Supplier failed to deliver the goods",
    }


@pytest.fixture
def codec() -> SwiftCodec:
    return SwiftCodec()


@pytest.fixture
def validator() -> SwiftValidator:
    return SwiftValidator()


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(response_delay_scale=0)


@pytest.fixture
def engine(settings: EngineSettings) -> SwiftMessagingEngine:
    return SwiftMessagingEngine(settings)


@pytest.fixture
def make_message(codec: SwiftCodec) -> Callable[..., SwiftMessage]:
    """Build a ``SwiftMessage`` with a wire form, bypassing validation."""

    def _make(
        message_type: MessageType = MessageType.ISSUE_GUARANTEE,
        content: dict[str, Any] | None = None,
        *,
        direction: Direction = Direction.OUTGOING,
        status: MessageStatus = MessageStatus.SENT,
        sender_id: str = INSTITUTION_BIC,
        receiver_id: str = COUNTERPARTY_BIC,
        **fields: Any,
    ) -> SwiftMessage:
        content = dict(content or {})
        return SwiftMessage(
            type=message_type,
            direction=direction,
            status=status,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            raw_form=codec.encode(content, message_type, sender_id, receiver_id),
            **fields,
        )

    return _make
