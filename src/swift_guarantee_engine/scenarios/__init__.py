"""Scripted business scenarios."""

from __future__ import annotations

from swift_guarantee_engine.scenarios.engine import ScenarioEngine
from .parameters import (
    AmendmentParameters,
    ClaimParameters,
    DiscrepancyParameters,
    ExpiryParameters,
    IssuanceParameters,
    ScenarioParameters,
)
from .results import ScenarioResult, ScenarioSummary, TimelineEntry
from .templates import SCENARIOS, ScenarioDefinition, ScenarioStep, StepContext

__all__ = [
    "SCENARIOS",
    "AmendmentParameters",
    "ClaimParameters",
    "DiscrepancyParameters",
    "ExpiryParameters",
    "IssuanceParameters",
    "ScenarioDefinition",
    "ScenarioEngine",
    "ScenarioParameters",
    "ScenarioResult",
    "ScenarioStep",
    "ScenarioSummary",
    "StepContext",
    "TimelineEntry",
]
