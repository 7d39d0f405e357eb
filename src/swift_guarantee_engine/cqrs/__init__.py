"""Write-side commands and their dispatcher."""

from __future__ import annotations

from .commands import (
    ClearMessages,
    Command,
    ReceiveMessage,
    RunScenario,
    SubmitMessage,
    UpdateMessageStatus,
)
from .dispatcher import CommandDispatcher

__all__ = [
    "ClearMessages",
    "Command",
    "CommandDispatcher",
    "ReceiveMessage",
    "RunScenario",
    "SubmitMessage",
    "UpdateMessageStatus",
]
