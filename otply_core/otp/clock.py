"""
Clock
=====
Injectable "now" provider so expiry and windows can be tested without sleeping.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int:
        """Current time as epoch milliseconds."""


class SystemClock:
    """Wall clock."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int = 0, seconds: float = 0) -> int:
        self._now += ms + int(seconds * 1000)
        return self._now

    def set(self, now_ms: int) -> None:
        self._now = now_ms
