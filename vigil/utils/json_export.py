"""
JSON rendering of events.

Timestamps are written as ISO-8601 UTC strings with millisecond
precision (``1970-01-01T00:00:00.000Z``) instead of raw epoch seconds.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from vigil.core.errors import InvalidEventError
from vigil.core.event import Event

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def time_at(unix: float) -> datetime:
    """
    Return the UTC datetime of a Unix epoch time, truncated to milliseconds.

    Raises:
        InvalidEventError: If *unix* is not finite or falls outside the
            years 1 to 9999.
    """
    try:
        return _EPOCH + timedelta(milliseconds=int(unix * 1000))
    except (OverflowError, ValueError) as exc:
        raise InvalidEventError(f"time out of range: {unix!r}") from exc


def unix_to_iso8601(unix: float) -> str:
    """
    Format Unix epoch seconds as an ISO-8601 UTC string.

    >>> unix_to_iso8601(0)
    '1970-01-01T00:00:00.000Z'
    """
    dt = time_at(unix)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T"
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}Z"
    )


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Present fields of *event* as a JSON-ready dict."""
    out = event.present_fields()
    if "time" in out:
        out["time"] = unix_to_iso8601(out["time"])
    return out


def event_to_json(event: Event) -> str:
    """Convert an event to a JSON string."""
    return json.dumps(event_to_dict(event))
