"""
Structured logging for the event pipeline.

Provides configurable log levels (silent, normal, verbose, debug) with
consistent line formatting for decode progress, warnings, deprecation
notices and statistics.
"""

from __future__ import annotations

import functools
import sys
from enum import Enum
from typing import Any, Callable, Dict, Optional, TextIO, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class LogLevel(Enum):
    """
    Logging levels for the pipeline.

    SILENT:  No output at all.
    NORMAL:  Warnings and deprecation notices.
    VERBOSE: Progress information and statistics.
    DEBUG:   Detailed per-frame output.
    """

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class PipelineLogger:
    """
    Structured logger for codec and CLI output.

    Output is filtered by the configured level.  When no stream is
    given, lines go to whatever ``sys.stderr`` is at write time.

    Attributes:
        level: The minimum log level to display.
        stream: The output stream, or ``None`` for stderr.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Args:
            level: Minimum level a message needs to be written.
            stream: Where lines go; stderr at write time if None.
        """
        self.level: LogLevel = level
        self.stream: Optional[TextIO] = stream

    def debug(self, message: str, **kwargs: Any) -> None:
        """
        Log a debug message (only shown at DEBUG level).

        Args:
            message: The message text.
            **kwargs: Extra values, each written on its own indented line.
        """
        if self.level.value >= LogLevel.DEBUG.value:
            self._write(f"[DEBUG] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log an info message (shown at VERBOSE and DEBUG levels).

        Args:
            message: The message text.
            **kwargs: Extra values, each written on its own indented line.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[INFO] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def warning(self, message: str) -> None:
        """
        Log a warning (shown at NORMAL level and above).

        Args:
            message: The warning text.
        """
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"[WARN] {message}")

    def deprecation(self, comment: str) -> None:
        """
        Log a deprecation notice (shown at NORMAL level and above).

        Advisory only; never raises.

        Args:
            comment: The deprecation notice.
        """
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"[DEPRECATED] {comment}")

    def frame_decoded(self, size: int, states: int, events: int) -> None:
        """
        Log a decoded frame (shown at DEBUG level).

        Args:
            size: Encoded frame size in bytes.
            states: Number of states in the frame.
            events: Number of events in the frame.
        """
        if self.level.value >= LogLevel.DEBUG.value:
            self._write(
                f"[DEBUG] Decoded frame of {size} bytes "
                f"(states: {states}, events: {events})"
            )

    def statistics(self, stats: Dict[str, Any]) -> None:
        """
        Log statistics (shown at VERBOSE level and above).

        Args:
            stats: Counters keyed by snake_case name; keys are shown
                title-cased with spaces.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write("=== Statistics ===")
            for key, value in stats.items():
                label = key.replace("_", " ").title()
                self._write(f"  {label}: {value}")

    def _write(self, message: str) -> None:
        """Write a line to the output stream."""
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(message + "\n")


_default_logger = PipelineLogger()


def get_logger() -> PipelineLogger:
    """Return the process-wide default logger."""
    return _default_logger


def set_logger(logger: PipelineLogger) -> None:
    """Replace the process-wide default logger."""
    global _default_logger
    _default_logger = logger


def deprecated(comment: str) -> Callable[[F], F]:
    """
    Decorator that logs ``comment`` as a deprecation notice on every call.

    The notice goes through the default logger; the wrapped function's
    result is returned unchanged.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            get_logger().deprecation(comment)
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
