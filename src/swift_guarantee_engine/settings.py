"""EngineSettings — immutable runtime configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Tunables for one :class:`SwiftMessagingEngine` instance.

    Static rule tables (validation, responses, scenarios) are module
    constants and are not configurable here.
    """

    model_config = ConfigDict(frozen=True)

    max_history_size: int = Field(default=1000, ge=1)
    response_delay_scale: float = Field(
        default=1.0, ge=0, description="Multiplier for response and step delays"
    )
    auto_respond: bool = True
    subscriber_buffer_size: int = Field(default=100, ge=1)
    default_search_limit: int = Field(default=50, ge=1)
    institution_bic: str = "INTXGB2LXXX"
    counterparty_bic: str = "BNKSSGSGXXX"
    structured_logging: bool = False
