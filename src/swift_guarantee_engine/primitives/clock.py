"""Monotonic UTC clock used to stamp message timestamps."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

_ONE_MICROSECOND = timedelta(microseconds=1)


class MonotonicClock:
    """Injectable clock whose readings never go backwards.

    Two reads in the same microsecond are pushed apart by one microsecond so
    timestamp ordering matches creation ordering.
    """

    def __init__(self) -> None:
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = datetime.now(timezone.utc)
            if self._last is not None and current <= self._last:
                current = self._last + _ONE_MICROSECOND
            self._last = current
            return current


_default_clock = MonotonicClock()


def utc_now() -> datetime:
    """Read the process-wide monotonic clock."""
    return _default_clock.now()
