"""
Tests for event construction.

Tests cover option mapping, time rounding and defaults, and the
failure-reporting path.
"""

import pytest

from vigil.core.clock import FixedClock
from vigil.core.errors import InvalidEventError
from vigil.core.event import Event
from vigil.core.factory import (
    FAILURE_SERVICE,
    EventOptions,
    FailureDescription,
    create_event,
    describe_exception,
    event_from_exception,
    event_from_failure,
)


# ---------------------------------------------------------------------------
# Tests: Options
# ---------------------------------------------------------------------------


class TestEventOptions:
    """Test building options from loose mappings."""

    def test_from_mapping(self) -> None:
        opts = EventOptions.from_mapping(
            {"host": "h", "service": "s", "tags": ["a", "b"], "metric": 3}
        )
        assert opts.host == "h"
        assert opts.service == "s"
        assert opts.tags == ("a", "b")
        assert opts.metric == 3

    def test_empty_mapping(self) -> None:
        assert EventOptions.from_mapping({}) == EventOptions()

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(InvalidEventError, match="colour"):
            EventOptions.from_mapping({"host": "h", "colour": "red"})

    def test_bare_string_tags_rejected(self) -> None:
        """A string is not a tag sequence."""
        with pytest.raises(InvalidEventError, match="tags"):
            EventOptions.from_mapping({"tags": "prod"})

    def test_null_tags_means_no_tags(self) -> None:
        assert EventOptions.from_mapping({"tags": None}).tags == ()


# ---------------------------------------------------------------------------
# Tests: create_event
# ---------------------------------------------------------------------------


class TestCreateEvent:
    """Test create_event."""

    def test_fields_copied(self) -> None:
        e = create_event(
            EventOptions(
                host="h", service="s", state="ok", description="d",
                tags=("t",), metric=1.5, ttl=10.0, time=100,
            ),
            FixedClock(0),
        )
        assert e == Event(
            host="h", service="s", state="ok", time=100, description="d",
            tags=("t",), metric=1.5, ttl=10.0,
        )

    def test_time_defaults_to_clock(self) -> None:
        assert create_event(EventOptions(host="h"), FixedClock(77)).time == 77

    @pytest.mark.parametrize(
        "given, expected",
        [(1.4, 1), (1.6, 2), (0.5, 0), (1.5, 2), (2.5, 2), (3.5, 4), (-0.5, 0), (12, 12)],
    )
    def test_time_rounds_half_to_even(self, given: float, expected: int) -> None:
        e = create_event(EventOptions(time=given), FixedClock(0))
        assert e.time == expected
        assert isinstance(e.time, int)

    def test_zero_time_is_kept(self) -> None:
        assert create_event(EventOptions(time=0), FixedClock(50)).time == 0

    @pytest.mark.parametrize("bad", ["soon", float("nan"), float("inf"), True])
    def test_bad_time_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidEventError, match="time"):
            create_event(EventOptions(time=bad), FixedClock(0))  # type: ignore[arg-type]

    def test_tags_become_tuple(self) -> None:
        e = create_event(EventOptions(tags=["a", "b"]), FixedClock(0))  # type: ignore[arg-type]
        assert e.tags == ("a", "b")


# ---------------------------------------------------------------------------
# Tests: Failure events
# ---------------------------------------------------------------------------


def _explode() -> None:
    raise RuntimeError("disk on fire")


class TestFailureEvents:
    """Test the self-reporting failure path."""

    def test_fixed_shape(self) -> None:
        failure = FailureDescription(
            kind="IOError",
            message="disk full",
            trace=("a.py:1 in f", "b.py:2 in g"),
        )
        e = event_from_failure(failure, FixedClock(9))
        assert e.service == FAILURE_SERVICE == "monitoring exception"
        assert e.state == "error"
        assert e.tags == ("exception", "IOError")
        assert e.description == "disk full\n\na.py:1 in f\nb.py:2 in g"
        assert e.time == 9
        assert e.host is None

    def test_empty_trace(self) -> None:
        e = event_from_failure(FailureDescription("E", "boom"), FixedClock(0))
        assert e.description == "boom\n\n"

    def test_describe_exception(self) -> None:
        """Kind, message and one line per traceback frame are captured."""
        try:
            _explode()
        except RuntimeError as exc:
            failure = describe_exception(exc)
        assert failure.kind == "RuntimeError"
        assert failure.message == "disk on fire"
        assert len(failure.trace) == 2
        assert failure.trace[-1].endswith("in _explode")
        assert "test_factory.py:" in failure.trace[0]

    def test_describe_unraised_exception(self) -> None:
        failure = describe_exception(ValueError("never raised"))
        assert failure.trace == ()

    def test_event_from_exception(self) -> None:
        try:
            _explode()
        except RuntimeError as exc:
            e = event_from_exception(exc, FixedClock(3))
        assert e.tags == ("exception", "RuntimeError")
        assert e.description.startswith("disk on fire\n\n")
        assert e.time == 3
