"""
Command-line interface for VIGIL.

``vigil decode`` turns binary message frames into JSON lines, and
``vigil encode`` builds a frame from JSON lines of event options.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import vigil
from vigil.core.clock import SystemClock
from vigil.core.event import Event, Message
from vigil.core.factory import EventOptions, create_event
from vigil.utils.json_export import event_to_json
from vigil.utils.logger import LogLevel, PipelineLogger
from vigil.wire.codec import CodecConfig, WireCodec


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the VIGIL CLI."""
    parser = argparse.ArgumentParser(
        prog="vigil",
        description="VIGIL: monitoring event wire codec",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vigil {vigil.__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--framed",
        action="store_true",
        help="Use 4-byte length-prefixed frames instead of one bare frame",
    )
    common.add_argument(
        "--max-frame-size",
        type=int,
        default=CodecConfig.max_frame_size,
        metavar="BYTES",
        help="Largest frame accepted (default: %(default)s)",
    )
    common.add_argument(
        "-o",
        "--output",
        choices=["silent", "normal", "verbose"],
        default="normal",
        help="Log output level (default: normal)",
    )
    common.add_argument(
        "-d",
        "--debug",
        type=int,
        choices=[0, 1, 2, 3],
        default=0,
        help="Debug level 0-3 (default: 0)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser(
        "decode", parents=[common], help="Print frames from FILE as JSON lines",
    )
    decode.add_argument("file", type=Path, help="Binary frame file")
    decode.add_argument(
        "--channel",
        choices=["events", "states", "all"],
        default="events",
        help="Which records to print (default: events)",
    )

    encode = sub.add_parser(
        "encode", parents=[common], help="Encode JSON lines of event options",
    )
    encode.add_argument("file", type=Path, help="JSON lines file, one event per line")
    encode.add_argument("dest", type=Path, help="Where to write the encoded frame")

    return parser


def _resolve_log_level(output: str, debug: int) -> LogLevel:
    """Determine the effective log level from output and debug settings."""
    if debug >= 3:
        return LogLevel.DEBUG
    if output == "verbose" or debug >= 1:
        return LogLevel.VERBOSE
    if output == "silent":
        return LogLevel.SILENT
    return LogLevel.NORMAL


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``vigil`` CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        _run(args)
    except SystemExit:
        raise
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


def _run(args: argparse.Namespace) -> None:
    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        sys.exit(2)

    logger = PipelineLogger(level=_resolve_log_level(args.output, args.debug))
    codec = WireCodec(
        CodecConfig(
            clock=SystemClock(),
            logger=logger,
            max_frame_size=args.max_frame_size,
        )
    )

    if args.command == "decode":
        _decode(args, codec, logger)
    else:
        _encode(args, codec, logger)


def _decode(args: argparse.Namespace, codec: WireCodec, logger: PipelineLogger) -> None:
    frames = 0
    printed = 0
    with open(args.file, "rb") as f:
        if args.framed:
            messages = codec.iter_frames(f)
        else:
            messages = iter([codec.decode_stream(f)])
        for message in messages:
            frames += 1
            if message.error is not None:
                logger.warning(f"Frame {frames} carries error: {message.error}")
            for event in _select(message, args.channel):
                print(event_to_json(event))
                printed += 1

    logger.statistics({"frames": frames, "records_printed": printed})


def _select(message: Message, channel: str) -> List[Event]:
    if channel == "states":
        return list(message.states)
    if channel == "all":
        return list(message.states) + list(message.events)
    return list(message.events)


def _encode(args: argparse.Namespace, codec: WireCodec, logger: PipelineLogger) -> None:
    clock = codec.config.clock
    events: List[Event] = []
    for lineno, line in enumerate(args.file.read_text().splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        options = json.loads(line)
        if not isinstance(options, dict):
            raise ValueError(f"line {lineno}: expected a JSON object")
        events.append(create_event(EventOptions.from_mapping(options), clock))
        logger.debug(f"Parsed event on line {lineno}")

    message = Message(events=tuple(events))
    data = codec.encode_frame(message) if args.framed else codec.encode(message)
    args.dest.write_bytes(data)
    logger.info(f"Wrote {len(events)} events to {args.dest}")

    logger.statistics({"events": len(events), "bytes_written": len(data)})
