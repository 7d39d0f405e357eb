"""Closed enumerations of the message domain."""

from __future__ import annotations

from enum import Enum

from ..primitives.exceptions import UnsupportedMessageTypeError

_TITLES = {
    "MT760": "Issue of a Guarantee",
    "MT765": "Amendment to a Guarantee",
    "MT767": "Confirmation of Amendment",
    "MT768": "Acknowledgment",
    "MT769": "Advice of Discrepancy",
    "MT798": "Free Format Message",
}


class MessageType(str, Enum):
    """Guarantee message categories, valued by their SWIFT MT name."""

    ISSUE_GUARANTEE = "MT760"
    AMEND_GUARANTEE = "MT765"
    CONFIRM_AMENDMENT = "MT767"
    ACKNOWLEDGE = "MT768"
    DISCREPANCY_ADVICE = "MT769"
    FREE_FORMAT = "MT798"

    @property
    def code(self) -> str:
        """Numeric wire code carried in the application header, e.g. ``760``."""
        return self.value[2:]

    @property
    def title(self) -> str:
        return _TITLES[self.value]

    @classmethod
    def from_code(cls, code: str) -> MessageType:
        for member in cls:
            if member.code == code:
                return member
        raise UnsupportedMessageTypeError(f"MT{code}")

    @classmethod
    def parse(cls, value: MessageType | str) -> MessageType:
        """Accept a member, an ``MTxxx`` name, a bare code or a member name."""
        if isinstance(value, MessageType):
            return value
        text = str(value).strip().upper()
        if text.isdigit():
            return cls.from_code(text)
        for member in cls:
            if text in (member.value, member.name):
                return member
        raise UnsupportedMessageTypeError(value)


class Direction(str, Enum):
    OUTGOING = "OUTGOING"
    INCOMING = "INCOMING"

    def reversed(self) -> Direction:
        if self is Direction.OUTGOING:
            return Direction.INCOMING
        return Direction.OUTGOING


class MessageStatus(str, Enum):
    """Advisory processing state; any transition is allowed and recorded."""

    SENT = "SENT"
    RECEIVED = "RECEIVED"
    FAILED = "FAILED"
    PENDING = "PENDING"
    PROCESSED = "PROCESSED"
    ACKNOWLEDGED = "ACKNOWLEDGED"


class ThreadStatus(str, Enum):
    EMPTY = "EMPTY"
    PENDING = "PENDING"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    CONFIRMED = "CONFIRMED"
    DISPUTED = "DISPUTED"
    IN_PROGRESS = "IN_PROGRESS"
