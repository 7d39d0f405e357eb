"""Automatic counterparty responses and their deferred delivery."""

from __future__ import annotations

from .generator import RESPONSE_REFERENCE_PREFIX, ResponseGenerator
from .rules import RESPONSE_RULES, ResponseRule
from .scheduler import ResponseScheduler

__all__ = [
    "RESPONSE_REFERENCE_PREFIX",
    "RESPONSE_RULES",
    "ResponseGenerator",
    "ResponseRule",
    "ResponseScheduler",
]
