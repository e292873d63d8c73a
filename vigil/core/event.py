"""
Event and message records.

An ``Event`` is one monitoring reading: which host and service it
describes, its state, a metric, free-form description and tags.  The
same record shape travels on two channels of a ``Message``: ``events``
(current readings) and ``states`` (historical state changes).

Optional fields that are absent are ``None``; they are never filled
with empty strings or zeros, so a filter on ``service == ""`` cannot
match an event that simply has no service.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Union

from vigil.core.clock import Clock

Number = Union[int, float]


@dataclass(frozen=True)
class Event:
    """
    Immutable monitoring event.

    Attributes:
        host: Host the event describes.
        service: Service on that host.
        state: Free-form state, e.g. ``'ok'`` or ``'critical'``.
        time: Seconds since the epoch. Always set after decoding.
        description: Human-readable detail.
        tags: Tag strings. Order carries no meaning for matching.
        metric: Numeric reading; integers and floats are kept apart.
        ttl: Seconds the event stays valid.
    """

    host: Optional[str] = None
    service: Optional[str] = None
    state: Optional[str] = None
    time: Optional[int] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    metric: Optional[Number] = None
    ttl: Optional[float] = None

    def present_fields(self) -> Dict[str, Any]:
        """
        Return the fields that are set, in declaration order.

        ``None`` fields are dropped; ``tags`` is kept only when non-empty.
        """
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "tags":
                if not value:
                    continue
                value = list(value)
            out[f.name] = value
        return out


@dataclass(frozen=True)
class Message:
    """
    One decoded wire frame.

    Attributes:
        ok: Acknowledgement flag set by servers in replies.
        error: Error text accompanying ``ok=False``.
        states: Historical state records.
        events: Current event records.
        query: Opaque query expression, interpreted by the query layer.
    """

    ok: Optional[bool] = None
    error: Optional[str] = None
    states: Tuple[Event, ...] = field(default_factory=tuple)
    events: Tuple[Event, ...] = field(default_factory=tuple)
    query: Optional[str] = None


def expire(event: Event, clock: Clock) -> Event:
    """
    Return an expired version of *event*.

    Only ``host`` and ``service`` survive; the result has state
    ``'expired'`` and the current clock reading as its time.
    """
    return Event(
        host=event.host,
        service=event.service,
        state="expired",
        time=clock.now(),
    )
