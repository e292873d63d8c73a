"""
Event construction from option sets and runtime failures.

``EventOptions`` lists every option an event can be built from;
``create_event`` turns it into an ``Event`` with a guaranteed
timestamp.  Failures are described through ``FailureDescription`` so
that the self-reporting path does not depend on how a particular
runtime exposes exception classes and tracebacks.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Mapping, Optional, Tuple

from vigil.core.clock import Clock
from vigil.core.errors import InvalidEventError
from vigil.core.event import Event, Number

FAILURE_SERVICE = "monitoring exception"


@dataclass(frozen=True)
class EventOptions:
    """
    Options accepted by ``create_event``.

    Every field is optional.  ``time`` may be fractional; it is rounded
    when the event is built.
    """

    host: Optional[str] = None
    service: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    metric: Optional[Number] = None
    ttl: Optional[float] = None
    time: Optional[Number] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> EventOptions:
        """
        Build options from a loosely-typed mapping.

        Raises:
            InvalidEventError: If the mapping has keys that are not
                event options, or ``tags`` is a bare string.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise InvalidEventError(f"Unrecognized event options: {sorted(unknown)}")

        values = dict(options)
        if "tags" in values:
            values["tags"] = _as_tags(values["tags"])
        return cls(**values)


def _as_tags(tags: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, (str, bytes)):
        raise InvalidEventError(f"tags must be a sequence of strings, got {tags!r}")
    return tuple(tags)


def _round_time(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidEventError(f"time must be numeric, got {value!r}")
    try:
        return int(round(value))
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidEventError(f"time must be a finite number, got {value!r}") from exc


def create_event(options: EventOptions, clock: Clock) -> Event:
    """
    Build an event from *options*.

    ``time`` is rounded to the nearest second (ties to even) when given
    and read from *clock* otherwise.

    Raises:
        InvalidEventError: If ``time`` is not a finite number.
    """
    if options.time is None:
        t = clock.now()
    else:
        t = _round_time(options.time)
    return Event(
        host=options.host,
        service=options.service,
        state=options.state,
        time=t,
        description=options.description,
        tags=_as_tags(options.tags),
        metric=options.metric,
        ttl=options.ttl,
    )


# ------------------------------------------------------------------ #
# Failure reporting
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class FailureDescription:
    """
    Runtime-neutral description of a caught failure.

    Attributes:
        kind: Name of the failure class, e.g. ``'ValueError'``.
        message: The failure's message text.
        trace: Formatted stack frames, outermost first.
    """

    kind: str
    message: str
    trace: Tuple[str, ...] = ()


def describe_exception(exc: BaseException) -> FailureDescription:
    """Describe a Python exception, one trace line per traceback frame."""
    frames = traceback.extract_tb(exc.__traceback__)
    return FailureDescription(
        kind=type(exc).__name__,
        message=str(exc),
        trace=tuple(f"{fr.filename}:{fr.lineno} in {fr.name}" for fr in frames),
    )


def event_from_failure(failure: FailureDescription, clock: Clock) -> Event:
    """
    Build the self-reporting event for a failure.

    The description is the failure message, a blank line, then the
    trace lines joined by newlines.
    """
    return Event(
        service=FAILURE_SERVICE,
        state="error",
        time=clock.now(),
        tags=("exception", failure.kind),
        description=failure.message + "\n\n" + "\n".join(failure.trace),
    )


def event_from_exception(exc: BaseException, clock: Clock) -> Event:
    """Shorthand for ``event_from_failure(describe_exception(exc), clock)``."""
    return event_from_failure(describe_exception(exc), clock)
