"""Scenario run results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..domain.enums import MessageType
from ..domain.message import SwiftMessage


class TimelineEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset_ms: int
    action: str
    message_id: str
    message_type: MessageType


class ScenarioSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: str
    messages_exchanged: int
    reference: str | None
    status: str


class ScenarioResult(BaseModel):
    messages: list[SwiftMessage]
    timeline: list[TimelineEntry]
    summary: ScenarioSummary
