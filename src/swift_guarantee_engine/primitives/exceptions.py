"""Domain and infrastructure exceptions for swift-guarantee-engine."""

from __future__ import annotations


class SwiftEngineError(Exception):
    """Root exception for the entire engine."""


class DomainError(SwiftEngineError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when a message or resource is not found."""


class MessageNotFoundError(NotFoundError):
    """Raised when a specific message cannot be found by ID."""

    def __init__(self, message_id: object) -> None:
        self.message_id = message_id
        super().__init__(f"Message with id={message_id!r} not found")


class StructuralError(DomainError):
    """Raised when an incomplete or inconsistent record reaches the store.

    The store guarantees no partial mutation when this is raised.
    """


class DuplicateMessageError(StructuralError):
    """Raised when a message id is already present in the store."""

    def __init__(self, message_id: object) -> None:
        self.message_id = message_id
        super().__init__(f"Message with id={message_id!r} is already stored")


class MalformedMessageError(SwiftEngineError):
    """Raised when wire text cannot be decoded.

    Decode-time and fatal: the block structure is unrecoverable.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed SWIFT message: {reason}")


class ValidationError(SwiftEngineError):
    """Structured validation failure.

    The validator itself never raises this; callers opt in through
    ``ValidationReport.raise_for_errors()``.
    """

    def __init__(
        self,
        errors: list[str] | str | None = None,
        warnings: list[str] | None = None,
    ) -> None:
        if isinstance(errors, str):
            self.errors: list[str] = [errors]
        else:
            self.errors = list(errors or [])
        self.warnings: list[str] = list(warnings or [])
        super().__init__("; ".join(self.errors) or "validation failed")


class ConfigurationError(SwiftEngineError):
    """Base class for unknown message types, scenarios or query options."""


class UnsupportedMessageTypeError(ConfigurationError):
    """Raised when a message type (or numeric wire code) is not supported."""

    def __init__(self, message_type: object) -> None:
        self.message_type = message_type
        super().__init__(f"Unsupported message type: {message_type}")


class UnknownScenarioError(ConfigurationError):
    """Raised before any message is built for an unknown scenario name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = list(available or [])
        msg = f"Unknown scenario: {name}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class ScenarioParameterError(ConfigurationError):
    """Raised when scenario parameters are invalid or yield an invalid message."""

    def __init__(self, scenario: str, details: list[str]) -> None:
        self.scenario = scenario
        self.details = list(details)
        super().__init__(
            f"Invalid parameters for scenario {scenario!r}: " + "; ".join(details)
        )
