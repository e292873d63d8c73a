"""
Shared pytest fixtures for the VIGIL test suite.

Provides a fixed clock, a quiet codec bound to it, and sample events
used across unit and integration tests.
"""

import pytest

from vigil.core.clock import FixedClock
from vigil.core.event import Event
from vigil.utils.logger import LogLevel, PipelineLogger
from vigil.wire.codec import CodecConfig, WireCodec

FIXED_NOW = 1_700_000_000


@pytest.fixture
def clock() -> FixedClock:
    """A clock pinned to a known reading."""
    return FixedClock(FIXED_NOW)


@pytest.fixture
def codec(clock: FixedClock) -> WireCodec:
    """A codec using the fixed clock and a silent logger."""
    return WireCodec(
        CodecConfig(clock=clock, logger=PipelineLogger(level=LogLevel.SILENT))
    )


@pytest.fixture
def sample_event() -> Event:
    """A fully-populated event."""
    return Event(
        host="web1",
        service="cpu",
        state="ok",
        time=1_600_000_000,
        description="load average",
        tags=("prod", "linux"),
        metric=0.75,
        ttl=60.0,
    )
