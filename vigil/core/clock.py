"""
Time sources for event timestamps.

Every timestamp the core assigns comes from a ``Clock`` passed in by the
caller, so normalization and event construction stay deterministic
under test.  ``SystemClock`` reads the wall clock; ``FixedClock`` returns
whatever reading it was given.
"""

from __future__ import annotations

import time
from typing import Protocol


def unix_time() -> float:
    """Current wall-clock time in fractional seconds since the epoch."""
    return time.time()


class Clock(Protocol):
    """Anything that reports the current time in whole epoch seconds."""

    def now(self) -> int:
        ...


class SystemClock:
    """
    Wall-clock time source.

    Readings are truncated to whole seconds, matching the integer
    ``time`` field of an event.
    """

    __slots__ = ()

    def now(self) -> int:
        return int(unix_time())

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """
    Clock that always reports the same reading.

    Attributes:
        reading: The epoch-seconds value returned by ``now``.
    """

    __slots__ = ("reading",)

    def __init__(self, reading: int = 0) -> None:
        self.reading: int = reading

    def now(self) -> int:
        return self.reading

    def set(self, reading: int) -> None:
        """Move the clock to *reading*."""
        self.reading = reading

    def __repr__(self) -> str:
        return f"FixedClock({self.reading})"
