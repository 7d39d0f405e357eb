from __future__ import annotations

import pytest

from swift_guarantee_engine.codec import SwiftCodec
from swift_guarantee_engine.domain import Direction, MessageStatus, MessageType
from swift_guarantee_engine.responses import (
    RESPONSE_REFERENCE_PREFIX,
    RESPONSE_RULES,
    ResponseGenerator,
)


@pytest.fixture
def generator(codec: SwiftCodec) -> ResponseGenerator:
    return ResponseGenerator(codec)


@pytest.mark.parametrize(
    ("original", "reply", "delay_ms"),
    [
        (MessageType.ISSUE_GUARANTEE, MessageType.ACKNOWLEDGE, 2000),
        (MessageType.AMEND_GUARANTEE, MessageType.CONFIRM_AMENDMENT, 5000),
        (MessageType.CONFIRM_AMENDMENT, MessageType.ACKNOWLEDGE, 1000),
        (MessageType.DISCREPANCY_ADVICE, MessageType.ACKNOWLEDGE, 3000),
    ],
)
def test_rule_table(generator, original, reply, delay_ms) -> None:
    rule = generator.rule_for(original)

    assert rule is not None
    assert rule.response_type is reply
    assert generator.delay_for(original) == delay_ms
    assert rule.delay_seconds == delay_ms / 1000


@pytest.mark.parametrize(
    "message_type", [MessageType.ACKNOWLEDGE, MessageType.FREE_FORMAT]
)
def test_types_without_a_reply(generator, make_message, message_type) -> None:
    assert generator.delay_for(message_type) is None
    assert generator.generate_response(make_message(message_type)) is None


def test_guarantee_is_acknowledged(
    generator, make_message, issue_content, codec
) -> None:
    original = make_message(MessageType.ISSUE_GUARANTEE, issue_content)

    reply = generator.generate_response(original)

    assert reply is not None
    assert reply.type is MessageType.ACKNOWLEDGE
    assert reply.is_response
    assert reply.related_message_id == original.id
    assert reply.sender_id == original.receiver_id
    assert reply.receiver_id == original.sender_id
    assert reply.direction is Direction.INCOMING
    assert reply.status is MessageStatus.RECEIVED
    assert reply.content["originalReference"] == "GTR2024000001"
    assert reply.content["acknowledgmentType"] == "RECEIVED"
    assert reply.content["acknowledgmentText"] == "Guarantee received and processed"
    assert reply.content["transactionReference"].startswith(RESPONSE_REFERENCE_PREFIX)
    assert len(reply.content["transactionReference"]) <= 16
    assert codec.decode(reply.raw_form).content == reply.content


def test_amendment_confirmation_carries_amendment_reference(
    generator, make_message, amendment_content
) -> None:
    original = make_message(MessageType.AMEND_GUARANTEE, amendment_content)

    reply = generator.generate_response(original)

    assert reply is not None
    assert reply.type is MessageType.CONFIRM_AMENDMENT
    assert reply.content["amendmentReference"] == "AMD2024000001"
    assert reply.content["originalReference"] == "AMD2024000001"
    assert reply.content["confirmationType"] == "ACCEPTED"


def test_incoming_original_yields_outgoing_reply(
    generator, make_message, claim_content
) -> None:
    original = make_message(
        MessageType.DISCREPANCY_ADVICE,
        claim_content,
        direction=Direction.INCOMING,
        status=MessageStatus.RECEIVED,
        sender_id="BNKSSGSGXXX",
        receiver_id="INTXGB2LXXX",
    )

    reply = generator.generate_response(original)

    assert reply is not None
    assert reply.direction is Direction.OUTGOING
    assert reply.status is MessageStatus.SENT
    assert reply.sender_id == "INTXGB2LXXX"
    assert reply.content["originalReference"] == "CLM2024000001"
    assert reply.content["acknowledgmentText"] == "Claim received and under review"


def test_replies_differ_only_in_identity(
    generator, make_message, issue_content
) -> None:
    original = make_message(MessageType.ISSUE_GUARANTEE, issue_content)

    first = generator.generate_response(original)
    second = generator.generate_response(original)

    assert first is not None and second is not None
    assert first.id != second.id
    stable = ("originalReference", "acknowledgmentType", "acknowledgmentText")
    assert {k: first.content[k] for k in stable} == {
        k: second.content[k] for k in stable
    }
    assert first.type is second.type
    assert first.related_message_id == second.related_message_id


def test_custom_rules_replace_the_table(codec, make_message) -> None:
    rules = {
        MessageType.ISSUE_GUARANTEE: RESPONSE_RULES[MessageType.ISSUE_GUARANTEE]
    }
    generator = ResponseGenerator(codec, rules=rules)

    assert generator.rule_for(MessageType.AMEND_GUARANTEE) is None
    assert generator.generate_response(make_message(MessageType.ISSUE_GUARANTEE))
