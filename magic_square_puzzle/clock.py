from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    Game sessions measure elapsed play time through this interface rather
    than calling real time directly, so tests can drive time by hand.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


def elapsed_ms(started_at_s: float, ended_at_s: float) -> int:
    """Whole milliseconds between two clock readings, never negative."""

    return max(0, int(round((ended_at_s - started_at_s) * 1000.0)))
