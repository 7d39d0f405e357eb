"""Primitives: exceptions, ID generation, clock."""

from __future__ import annotations

from .clock import MonotonicClock, utc_now
from .exceptions import (
    ConfigurationError,
    DomainError,
    DuplicateMessageError,
    MalformedMessageError,
    MessageNotFoundError,
    NotFoundError,
    ScenarioParameterError,
    StructuralError,
    SwiftEngineError,
    UnknownScenarioError,
    UnsupportedMessageTypeError,
    ValidationError,
)
from .id_generator import ReferenceGenerator

__all__ = [
    "ConfigurationError",
    "DomainError",
    "DuplicateMessageError",
    "MalformedMessageError",
    "MessageNotFoundError",
    "MonotonicClock",
    "NotFoundError",
    "ReferenceGenerator",
    "ScenarioParameterError",
    "StructuralError",
    "SwiftEngineError",
    "UnknownScenarioError",
    "UnsupportedMessageTypeError",
    "ValidationError",
    "utc_now",
]
