"""swift-guarantee-engine: SWIFT-style guarantee message protocol engine."""

from __future__ import annotations

from .codec import DecodedMessage, SwiftCodec, message_templates
from .correlation import CorrelationEngine, MessageThread
from .domain import (
    Direction,
    FlowAnalysis,
    MessageFilter,
    MessagePage,
    MessageQuery,
    MessageStatistics,
    MessageStatus,
    MessageType,
    SearchResults,
    StatusTransition,
    SwiftMessage,
    ThreadStatus,
    Timeframe,
)
from .engine import SubmissionResult, SwiftMessagingEngine
from .factory import BuiltMessage, MessageFactory
from .notifications import NotificationEnvelope, NotificationHub, Subscription
from .primitives import (
    ConfigurationError,
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
from .scenarios import ScenarioEngine, ScenarioResult
from .settings import EngineSettings
from .validation import SwiftValidator, ValidationReport

__version__ = "0.1.0"

__all__ = [
    "BuiltMessage",
    "ConfigurationError",
    "CorrelationEngine",
    "DecodedMessage",
    "Direction",
    "DuplicateMessageError",
    "EngineSettings",
    "FlowAnalysis",
    "MalformedMessageError",
    "MessageFactory",
    "MessageFilter",
    "MessageNotFoundError",
    "MessagePage",
    "MessageQuery",
    "MessageStatistics",
    "MessageStatus",
    "MessageThread",
    "MessageType",
    "NotFoundError",
    "NotificationEnvelope",
    "NotificationHub",
    "ScenarioEngine",
    "ScenarioParameterError",
    "ScenarioResult",
    "SearchResults",
    "StatusTransition",
    "StructuralError",
    "Subscription",
    "SubmissionResult",
    "SwiftCodec",
    "SwiftEngineError",
    "SwiftMessage",
    "SwiftMessagingEngine",
    "SwiftValidator",
    "ThreadStatus",
    "Timeframe",
    "UnknownScenarioError",
    "UnsupportedMessageTypeError",
    "ValidationError",
    "ValidationReport",
    "message_templates",
]
