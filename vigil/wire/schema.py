"""
Protobuf schema of the message frame.

The schema is declared in code as a ``FileDescriptorProto`` and loaded
into a private descriptor pool, which avoids a ``protoc`` build step.
Equivalent ``.proto`` source::

    syntax = "proto2";
    package vigil.wire;

    message Event {
      optional int64  time          = 1;
      optional string state         = 2;
      optional string service       = 3;
      optional string host          = 4;
      optional string description   = 5;
      repeated string tags          = 7;
      optional double ttl           = 8;
      optional sint64 metric_sint64 = 13;
      optional double metric_d      = 14;
      optional float  metric_f      = 15;
    }

    message Query {
      optional string string = 1;
    }

    message Msg {
      optional bool   ok     = 2;
      optional string error  = 3;
      repeated Event  states = 4;
      optional Query  query  = 5;
      repeated Event  events = 6;
    }

Field numbers follow the established monitoring protocol so frames
interoperate with existing clients.
"""

from __future__ import annotations

from typing import Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "vigil.wire"

_F = descriptor_pb2.FieldDescriptorProto


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    field_type: int,
    repeated: bool = False,
    type_name: Optional[str] = None,
) -> None:
    f = message.field.add()
    f.name = name
    f.number = number
    f.type = field_type
    f.label = _F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL
    if type_name is not None:
        f.type_name = type_name


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Return the descriptor of the wire schema."""
    fdp = descriptor_pb2.FileDescriptorProto()
    fdp.name = "vigil/wire.proto"
    fdp.package = PACKAGE
    fdp.syntax = "proto2"

    event = fdp.message_type.add()
    event.name = "Event"
    _add_field(event, "time", 1, _F.TYPE_INT64)
    _add_field(event, "state", 2, _F.TYPE_STRING)
    _add_field(event, "service", 3, _F.TYPE_STRING)
    _add_field(event, "host", 4, _F.TYPE_STRING)
    _add_field(event, "description", 5, _F.TYPE_STRING)
    _add_field(event, "tags", 7, _F.TYPE_STRING, repeated=True)
    _add_field(event, "ttl", 8, _F.TYPE_DOUBLE)
    _add_field(event, "metric_sint64", 13, _F.TYPE_SINT64)
    _add_field(event, "metric_d", 14, _F.TYPE_DOUBLE)
    _add_field(event, "metric_f", 15, _F.TYPE_FLOAT)

    query = fdp.message_type.add()
    query.name = "Query"
    _add_field(query, "string", 1, _F.TYPE_STRING)

    msg = fdp.message_type.add()
    msg.name = "Msg"
    _add_field(msg, "ok", 2, _F.TYPE_BOOL)
    _add_field(msg, "error", 3, _F.TYPE_STRING)
    _add_field(msg, "states", 4, _F.TYPE_MESSAGE, repeated=True,
               type_name=f".{PACKAGE}.Event")
    _add_field(msg, "query", 5, _F.TYPE_MESSAGE, type_name=f".{PACKAGE}.Query")
    _add_field(msg, "events", 6, _F.TYPE_MESSAGE, repeated=True,
               type_name=f".{PACKAGE}.Event")

    return fdp


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(build_file_descriptor().SerializeToString())

EventPb = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Event"))
MsgPb = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Msg"))
