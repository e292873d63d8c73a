"""
Timestamp normalization for decoded events.

Senders may omit ``time``; the decode path fills it from the clock so
that every event downstream has one.  Encoding never calls into this
module.
"""

from __future__ import annotations

from dataclasses import replace

from vigil.core.clock import Clock
from vigil.core.event import Event, Message


def normalize(event: Event, clock: Clock) -> Event:
    """
    Ensure *event* carries a timestamp.

    Args:
        event: The event to normalize.
        clock: Source of the default timestamp.

    Returns:
        *event* itself when its time is set, otherwise a copy with
        ``time`` set to ``clock.now()``.
    """
    if event.time is not None:
        return event
    return replace(event, time=clock.now())


def normalize_message(message: Message, clock: Clock) -> Message:
    """Normalize every state and event of *message*, leaving other fields alone."""
    return replace(
        message,
        states=tuple(normalize(s, clock) for s in message.states),
        events=tuple(normalize(e, clock) for e in message.events),
    )
