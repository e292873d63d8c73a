"""
Wire codec: binary frames to normalized messages and back.

Decoding parses a frame through the protobuf schema and then fills in
missing event timestamps from the configured clock.  Encoding is a
pure structural transform: it validates field types and never adds a
timestamp.

Two framings are supported:

* a bare frame, where the whole byte string (or the whole stream up to
  end-of-data) is one encoded ``Msg``;
* length-prefixed frames, as used on TCP connections, where each frame
  is a 4-byte big-endian length followed by that many bytes.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Iterator, Optional

from google.protobuf.message import DecodeError

from vigil.core.clock import Clock, SystemClock
from vigil.core.errors import InvalidEventError, MalformedMessageError, StreamError
from vigil.core.event import Event, Message
from vigil.core.normalize import normalize_message
from vigil.utils.logger import PipelineLogger, get_logger
from vigil.wire.schema import EventPb, MsgPb

_LENGTH_PREFIX = 4
_READ_CHUNK = 64 * 1024
_STRING_FIELDS = ("host", "service", "state", "description")


@dataclass(frozen=True)
class CodecConfig:
    """
    Codec settings.

    Attributes:
        clock: Source of timestamps for events decoded without one.
        logger: Logger for decode progress; the default logger if None.
        max_frame_size: Largest frame, in bytes, the codec will read.
        write_metric_f: Also write a single-precision copy of the metric
            for readers that only understand ``metric_f``.
    """

    clock: Clock = field(default_factory=SystemClock)
    logger: Optional[PipelineLogger] = None
    max_frame_size: int = 64 * 1024 * 1024
    write_metric_f: bool = True


class WireCodec:
    """
    Encoder and decoder for message frames.

    Holds only its configuration, so one instance can be shared freely
    between threads.

    Attributes:
        config: The codec settings.
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self.config: CodecConfig = config if config is not None else CodecConfig()

    @property
    def logger(self) -> PipelineLogger:
        return self.config.logger if self.config.logger is not None else get_logger()

    # ------------------------------------------------------------------ #
    # Decoding
    # ------------------------------------------------------------------ #

    def decode(self, data: bytes) -> Message:
        """
        Decode one frame and normalize its timestamps.

        Raises:
            MalformedMessageError: If *data* is not bytes, is larger than
                ``max_frame_size``, or does not parse.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise MalformedMessageError(
                f"Expected bytes, got {type(data).__name__}"
            )
        data = bytes(data)
        self._check_size(len(data))

        pb = MsgPb()
        try:
            pb.ParseFromString(data)
            message = _message_from_pb(pb)
        except (DecodeError, UnicodeDecodeError) as exc:
            raise MalformedMessageError(f"Malformed message frame: {exc}") from exc

        self.logger.frame_decoded(len(data), len(message.states), len(message.events))
        return normalize_message(message, self.config.clock)

    def decode_stream(self, stream: BinaryIO) -> Message:
        """
        Read *stream* to end-of-data and decode the bytes as one frame.

        Blocks until the stream reports end-of-data.

        Raises:
            StreamError: If reading the stream fails.
            MalformedMessageError: If the data is too large or does not parse.
        """
        chunks = []
        size = 0
        while True:
            chunk = self._read(stream, _READ_CHUNK)
            if not chunk:
                break
            size += len(chunk)
            self._check_size(size)
            chunks.append(chunk)
        return self.decode(b"".join(chunks))

    def read_frame(self, stream: BinaryIO) -> Optional[Message]:
        """
        Read and decode one length-prefixed frame.

        Returns:
            The decoded message, or ``None`` if the stream ended cleanly
            before the first byte of a frame.

        Raises:
            StreamError: If the stream fails or ends inside a frame.
            MalformedMessageError: If the declared length exceeds
                ``max_frame_size`` or the body does not parse.
        """
        header = self._read_exact(stream, _LENGTH_PREFIX, allow_eof=True)
        if header is None:
            return None
        length = int.from_bytes(header, "big")
        self._check_size(length)
        body = self._read_exact(stream, length)
        return self.decode(body)

    def iter_frames(self, stream: BinaryIO) -> Iterator[Message]:
        """Yield length-prefixed frames from *stream* until it ends."""
        while True:
            message = self.read_frame(stream)
            if message is None:
                return
            yield message

    # ------------------------------------------------------------------ #
    # Encoding
    # ------------------------------------------------------------------ #

    def encode(self, message: Message) -> bytes:
        """
        Serialize *message* to one frame.

        Raises:
            InvalidEventError: If any field has the wrong type or is out
                of range for the wire schema.
        """
        if not isinstance(message, Message):
            raise InvalidEventError(f"Expected Message, got {type(message).__name__}")

        pb = MsgPb()
        try:
            if message.ok is not None:
                if not isinstance(message.ok, bool):
                    raise InvalidEventError(f"ok must be a bool, got {message.ok!r}")
                pb.ok = message.ok
            if message.error is not None:
                pb.error = _check_str("error", message.error)
            if message.query is not None:
                pb.query.string = _check_str("query", message.query)
            for state in message.states:
                self._event_to_pb(state, pb.states.add())
            for event in message.events:
                self._event_to_pb(event, pb.events.add())
        except InvalidEventError:
            raise
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidEventError(f"Invalid message: {exc}") from exc

        return pb.SerializeToString()

    def encode_frame(self, message: Message) -> bytes:
        """Serialize *message* with a 4-byte big-endian length prefix."""
        body = self.encode(message)
        return len(body).to_bytes(_LENGTH_PREFIX, "big") + body

    def _event_to_pb(self, event: Event, pb: Any) -> None:
        if not isinstance(event, Event):
            raise InvalidEventError(f"Expected Event, got {type(event).__name__}")

        for name in _STRING_FIELDS:
            value = getattr(event, name)
            if value is not None:
                setattr(pb, name, _check_str(name, value))

        if event.time is not None:
            if isinstance(event.time, bool) or not isinstance(event.time, numbers.Integral):
                raise InvalidEventError(f"time must be an integer, got {event.time!r}")
            pb.time = int(event.time)

        if isinstance(event.tags, (str, bytes)):
            raise InvalidEventError(f"tags must be a sequence of strings, got {event.tags!r}")
        for tag in event.tags:
            pb.tags.append(_check_str("tags", tag))

        metric = event.metric
        if metric is not None:
            _check_real("metric", metric)
            if isinstance(metric, numbers.Integral):
                pb.metric_sint64 = int(metric)
            else:
                pb.metric_d = float(metric)
            if self.config.write_metric_f:
                pb.metric_f = float(metric)

        if event.ttl is not None:
            _check_real("ttl", event.ttl)
            pb.ttl = float(event.ttl)

    # ------------------------------------------------------------------ #
    # Stream helpers
    # ------------------------------------------------------------------ #

    def _check_size(self, size: int) -> None:
        if size > self.config.max_frame_size:
            raise MalformedMessageError(
                f"Frame of {size} bytes exceeds limit of "
                f"{self.config.max_frame_size} bytes"
            )

    @staticmethod
    def _read(stream: BinaryIO, n: int) -> bytes:
        try:
            chunk = stream.read(n)
        except (OSError, ValueError) as exc:
            # closed streams raise ValueError
            raise StreamError(f"Stream read failed: {exc}") from exc
        if chunk is None:
            raise StreamError("Stream has no data available (non-blocking stream)")
        return chunk

    def _read_exact(
        self, stream: BinaryIO, n: int, allow_eof: bool = False,
    ) -> Optional[bytes]:
        """Read exactly *n* bytes, blocking until they arrive."""
        buf = bytearray()
        while len(buf) < n:
            chunk = self._read(stream, n - len(buf))
            if not chunk:
                if allow_eof and not buf:
                    return None
                raise StreamError(f"Stream ended after {len(buf)} of {n} bytes")
            buf.extend(chunk)
        return bytes(buf)


# ------------------------------------------------------------------ #
# Protobuf conversion
# ------------------------------------------------------------------ #


def _check_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidEventError(f"{name} must be a string, got {value!r}")
    return value


def _check_real(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidEventError(f"{name} must be numeric, got {value!r}")


def _decoded_str(name: str, value: Any) -> str:
    # proto2 string fields holding invalid UTF-8 come back as bytes
    if not isinstance(value, str):
        raise MalformedMessageError(f"{name} is not valid UTF-8: {value!r}")
    return value


def _optional(pb: Any, name: str) -> Any:
    return getattr(pb, name) if pb.HasField(name) else None


def _optional_str(pb: Any, name: str) -> Optional[str]:
    if not pb.HasField(name):
        return None
    return _decoded_str(name, getattr(pb, name))


def _event_from_pb(pb: EventPb) -> Event:
    if pb.HasField("metric_sint64"):
        metric = pb.metric_sint64
    elif pb.HasField("metric_d"):
        metric = pb.metric_d
    else:
        metric = _optional(pb, "metric_f")

    return Event(
        host=_optional_str(pb, "host"),
        service=_optional_str(pb, "service"),
        state=_optional_str(pb, "state"),
        time=_optional(pb, "time"),
        description=_optional_str(pb, "description"),
        tags=tuple(_decoded_str("tags", t) for t in pb.tags),
        metric=metric,
        ttl=_optional(pb, "ttl"),
    )


def _message_from_pb(pb: MsgPb) -> Message:
    query = None
    if pb.HasField("query") and pb.query.HasField("string"):
        query = _decoded_str("query", pb.query.string)
    return Message(
        ok=_optional(pb, "ok"),
        error=_optional_str(pb, "error"),
        states=tuple(_event_from_pb(s) for s in pb.states),
        events=tuple(_event_from_pb(e) for e in pb.events),
        query=query,
    )
