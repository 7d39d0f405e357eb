from __future__ import annotations

import pytest

from swift_guarantee_engine.domain import MessageType
from swift_guarantee_engine.ports.validation import IMessageCheck
from swift_guarantee_engine.primitives.exceptions import ValidationError
from swift_guarantee_engine.validation import (
    SwiftValidator,
    ValidationContext,
    ValidationReport,
)


def test_complete_issue_is_valid(validator: SwiftValidator, issue_content) -> None:
    report = validator.validate(
        "MT760", issue_content, sender_id="INTXGB2LXXX", receiver_id="BNKSSGSGXXX"
    )

    assert report.is_valid
    assert report.errors == []
    assert report.warnings == []
    assert report.message_type == "MT760"
    assert report.fields_checked == len(issue_content)


@pytest.mark.parametrize(
    "field",
    [
        "transactionReference",
        "guaranteeAmount",
        "currency",
        "applicantName",
        "beneficiaryName",
    ],
)
def test_missing_required_field_is_named(
    validator: SwiftValidator, issue_content, field: str
) -> None:
    del issue_content[field]

    report = validator.validate(MessageType.ISSUE_GUARANTEE, issue_content)

    assert not report.is_valid
    assert f"Missing required field: {field}" in report.errors


def test_blank_required_field_counts_as_missing(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["applicantName"] = "   "

    report = validator.validate("MT760", issue_content)

    assert "Missing required field: applicantName" in report.errors


def test_expiry_before_issue_yields_exactly_one_error(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["expiryDate"] = "2023-06-30"

    report = validator.validate("MT760", issue_content)

    assert report.errors == ["Expiry date must be after issue date"]


def test_expiry_equal_to_issue_is_rejected(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["expiryDate"] = issue_content["issueDate"]

    report = validator.validate("MT760", issue_content)

    assert report.errors == ["Expiry date must be after issue date"]


def test_long_validity_is_only_a_warning(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["expiryDate"] = "2036-01-16"

    report = validator.validate("MT760", issue_content)

    assert report.is_valid
    assert report.warnings == ["Guarantee validity period exceeds 10 years"]


def test_large_amount_is_only_a_warning(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["guaranteeAmount"] = "25000000.00"

    report = validator.validate("MT760", issue_content)

    assert report.is_valid
    assert "Large guarantee amount detected, please verify" in report.warnings


def test_zero_amount_is_rejected(validator: SwiftValidator, issue_content) -> None:
    issue_content["guaranteeAmount"] = "0"

    report = validator.validate("MT760", issue_content)

    assert "Guarantee amount must be greater than zero" in report.errors
    prefix = "Invalid format for field guaranteeAmount"
    assert any(e.startswith(prefix) for e in report.errors)


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("transactionReference", "gtr-lowercase"),
        ("guaranteeAmount", "100.123"),
        ("currency", "XXX"),
        ("issueDate", "2024-02-30"),
        ("expiryDate", "15/01/2025"),
    ],
)
def test_format_violations_are_errors(
    validator: SwiftValidator, issue_content, field: str, value: str
) -> None:
    issue_content[field] = value

    report = validator.validate("MT760", issue_content)

    assert not report.is_valid
    prefix = f"Invalid format for field {field}:"
    assert any(e.startswith(prefix) for e in report.errors)


def test_bic_problems_are_warnings(validator: SwiftValidator, issue_content) -> None:
    issue_content["applicantBIC"] = "NOTABIC"

    report = validator.validate(
        "MT760", issue_content, sender_id="BAD", receiver_id="BNKSSGSGXXX"
    )

    assert report.is_valid
    prefix = "Format warning for field applicantBIC"
    assert any(w.startswith(prefix) for w in report.warnings)
    assert "Sender BIC BAD has an invalid format" in report.warnings


def test_non_swift_characters_are_warnings(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["applicantName"] = "ACME & Sons"

    report = validator.validate("MT760", issue_content)

    assert report.is_valid
    assert report.warnings == [
        "Field applicantName contains non-SWIFT compliant characters"
    ]


@pytest.mark.parametrize("text", ["See annex {A", "Closing -} early", "B}"])
def test_block_delimiters_in_text_are_errors(validator: SwiftValidator, text) -> None:
    report = validator.validate(
        "MT798", {"transactionReference": "FREE1", "messageText": text}
    )

    assert not report.is_valid
    assert report.errors == ["Field messageText contains block delimiters { or }"]


def test_tag_shaped_continuation_line_is_an_error(validator: SwiftValidator) -> None:
    content = {
        "transactionReference": "FREE1",
        "messageText": "First line\n:20:INJECTED",
    }

    report = validator.validate("MT798", content)

    assert not report.is_valid
    assert report.errors == [
        "Field messageText has a continuation line that reads as a field tag"
    ]


def test_tag_shaped_first_line_is_allowed(validator: SwiftValidator) -> None:
    report = validator.validate(
        "MT798", {"transactionReference": "FREE1", "messageText": ":20: see above"}
    )

    assert report.is_valid


def test_field_length_limits_are_errors(
    validator: SwiftValidator, issue_content
) -> None:
    issue_content["guaranteeText"] = "A" * 781

    report = validator.validate("MT760", issue_content)

    assert report.errors == [
        "Field guaranteeText exceeds maximum length of 780 characters"
    ]


def test_out_of_sequence_fields_warn(validator: SwiftValidator, issue_content) -> None:
    reordered = {"issueDate": issue_content.pop("issueDate"), **issue_content}

    report = validator.validate("MT760", reordered)

    assert report.is_valid
    assert report.warnings == ["Field issueDate appears out of expected sequence"]


def test_warnings_never_invalidate(validator: SwiftValidator, issue_content) -> None:
    issue_content["guaranteeAmount"] = "20000000.00"
    issue_content["expiryDate"] = "2040-01-01"
    issue_content["beneficiaryName"] = "Global Supplies & Co"

    report = validator.validate("MT760", issue_content, sender_id="nope")

    assert len(report.warnings) == 4
    assert report.is_valid


def test_unsupported_type_reports_single_error(validator: SwiftValidator) -> None:
    report = validator.validate("MT999", {"transactionReference": "X"})

    assert report.errors == ["Unsupported message type: MT999"]
    assert report.warnings == []
    assert not report.is_valid


@pytest.mark.parametrize(
    ("reason", "rejected"),
    [("Short", True), ("Goods not recvd", False)],
)
def test_claim_reason_minimum_length(
    validator: SwiftValidator, claim_content, reason: str, rejected: bool
) -> None:
    claim_content["claimReason"] = reason

    report = validator.validate("MT769", claim_content)

    message = "Detailed claim reason is required (minimum 10 characters)"
    assert (message in report.errors) is rejected


def test_claim_requires_original_reference(
    validator: SwiftValidator, claim_content
) -> None:
    del claim_content["originalReference"]

    report = validator.validate("MT769", claim_content)

    assert "Original guarantee reference is required for claims" in report.errors


def test_valid_amendment(validator: SwiftValidator, amendment_content) -> None:
    report = validator.validate("MT765", amendment_content)

    assert report.is_valid
    assert report.warnings == []


def test_amount_amendment_needs_numeric_value(
    validator: SwiftValidator, amendment_content
) -> None:
    amendment_content["newValue"] = "a lot more"

    report = validator.validate("MT765", amendment_content)

    assert report.errors == ["Amount amendments require a positive numeric new value"]


def test_expiry_amendment_needs_date_value(
    validator: SwiftValidator, amendment_content
) -> None:
    amendment_content["amendmentType"] = "EXPIRY_EXTENSION"
    amendment_content["newValue"] = "2026-01-15"
    assert validator.validate("MT765", amendment_content).is_valid

    amendment_content["newValue"] = "next year"
    report = validator.validate("MT765", amendment_content)
    assert report.errors == ["Expiry amendments require a valid new expiry date"]


def test_non_standard_amendment_type_warns(
    validator: SwiftValidator, amendment_content
) -> None:
    amendment_content["amendmentType"] = "BENEFICIARY_CHANGE"

    report = validator.validate("MT765", amendment_content)

    assert report.is_valid
    assert report.warnings == ["Non-standard amendment type: BENEFICIARY_CHANGE"]


def test_confirmation_needs_some_reference(validator: SwiftValidator) -> None:
    report = validator.validate(
        "MT767", {"confirmationType": "MAYBE", "confirmationText": "Pending"}
    )

    assert "Missing required field: amendmentReference" in report.errors
    assert (
        "Either amendment reference or original reference is required"
        in report.errors
    )
    assert report.warnings == ["Non-standard confirmation type: MAYBE"]


def test_custom_checks_are_merged(validator: SwiftValidator, issue_content) -> None:
    class AlwaysWarn:
        def check(self, context: ValidationContext) -> ValidationReport:
            report = ValidationReport.success(context.message_type.value)
            report.add_warning("custom warning")
            return report

    check = AlwaysWarn()
    assert isinstance(check, IMessageCheck)
    validator.add(check)

    report = validator.validate("MT760", issue_content)

    assert report.warnings == ["custom warning"]
    assert report.is_valid


def test_raise_for_errors(validator: SwiftValidator) -> None:
    report = validator.validate("MT798", {})

    with pytest.raises(ValidationError) as exc_info:
        report.raise_for_errors()

    assert exc_info.value.errors == ["Missing required field: transactionReference"]


def test_report_merge_and_serialization() -> None:
    first = ValidationReport.failure(["boom"], message_type="MT760")
    second = ValidationReport.success()
    second.add_warning("careful")

    merged = first.merge(second)

    assert not merged
    assert merged.to_dict() == {
        "is_valid": False,
        "errors": ["boom"],
        "warnings": ["careful"],
        "message_type": "MT760",
        "fields_checked": 0,
    }
