"""Subscriber notifications for store changes."""

from __future__ import annotations

from .envelope import NotificationEnvelope
from .hub import NotificationHub, Subscription

__all__ = ["NotificationEnvelope", "NotificationHub", "Subscription"]
