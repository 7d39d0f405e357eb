"""Command pipeline middleware."""

from __future__ import annotations

from .logging import LoggingMiddleware, StructuredLoggingMiddleware, describe
from .pipeline import build_pipeline

__all__ = [
    "LoggingMiddleware",
    "StructuredLoggingMiddleware",
    "build_pipeline",
    "describe",
]
