"""
Exception taxonomy for the codec boundary.

Decode failures, schema violations on encode and stream failures each
get their own type so callers can decide what to drop and what to
retry.  Underlying library errors are chained as ``__cause__``.
"""

from __future__ import annotations


class VigilError(Exception):
    """Base class for all errors raised by VIGIL."""
    pass


class MalformedMessageError(VigilError):
    """Raised when bytes do not parse as a valid message frame."""
    pass


class InvalidEventError(VigilError, ValueError):
    """Raised when an event or message violates the wire schema."""
    pass


class StreamError(VigilError, IOError):
    """Raised when the underlying byte stream fails or ends mid-frame."""
    pass
