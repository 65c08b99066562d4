"""
Protocol Buffers formatter

Encodes envelopes with the Loggregator ``logmessage`` proto2 schema, the
format Loggregator servers read from their UDP listener. The schema is
assembled from descriptors at import time so no generated code is needed.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from loggregator_emitter.core.log_message import LogEnvelope, LogMessage
from loggregator_emitter.core.message_type import MessageType
from loggregator_emitter.formatters.base_formatter import BaseFormatter

PACKAGE = "logmessage"

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(message, name, number, field_type, label=_Field.LABEL_REQUIRED, type_name=None):
    field = message.field.add(name=name, number=number, type=field_type, label=label)
    if type_name:
        field.type_name = type_name


def _schema() -> descriptor_pb2.FileDescriptorProto:
    """Build the logmessage.proto file descriptor."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="logmessage.proto",
        package=PACKAGE,
        syntax="proto2",
    )

    log_message = file_proto.message_type.add(name="LogMessage")
    message_type = log_message.enum_type.add(name="MessageType")
    for member in MessageType:
        message_type.value.add(name=member.name, number=member.value)

    _add_field(log_message, "message", 1, _Field.TYPE_BYTES)
    _add_field(
        log_message, "message_type", 2, _Field.TYPE_ENUM,
        type_name=f".{PACKAGE}.LogMessage.MessageType",
    )
    _add_field(log_message, "timestamp", 3, _Field.TYPE_SINT64)
    _add_field(log_message, "app_id", 4, _Field.TYPE_STRING)
    _add_field(log_message, "source_id", 6, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL)
    _add_field(log_message, "drain_urls", 7, _Field.TYPE_STRING, _Field.LABEL_REPEATED)
    _add_field(log_message, "source_name", 8, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL)

    log_envelope = file_proto.message_type.add(name="LogEnvelope")
    _add_field(log_envelope, "routing_key", 1, _Field.TYPE_STRING)
    _add_field(log_envelope, "signature", 2, _Field.TYPE_BYTES)
    _add_field(
        log_envelope, "log_message", 3, _Field.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.LogMessage",
    )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_schema().SerializeToString())

LogMessageProto = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.LogMessage")
)
LogEnvelopeProto = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.LogEnvelope")
)


class ProtobufFormatter(BaseFormatter):
    """
    Format envelopes as Loggregator protobuf messages.

    This is the default wire format of the emitter.
    """

    name = "protobuf"

    def to_proto(self, envelope: LogEnvelope):
        """Convert an envelope to a LogEnvelope protobuf message."""
        proto = LogEnvelopeProto()
        proto.routing_key = envelope.routing_key
        proto.signature = envelope.signature

        message = envelope.log_message
        proto.log_message.message = message.body
        proto.log_message.message_type = int(message.message_type)
        proto.log_message.timestamp = message.timestamp_nanos
        proto.log_message.app_id = message.app_id
        if message.source_id is not None:
            proto.log_message.source_id = message.source_id
        if message.source_name is not None:
            proto.log_message.source_name = message.source_name
        return proto

    def format(self, envelope: LogEnvelope) -> bytes:
        """Serialize envelope to protobuf bytes."""
        return self.to_proto(envelope).SerializeToString()

    def parse(self, data: bytes) -> LogEnvelope:
        """
        Parse protobuf bytes into an envelope.

        Raises:
            google.protobuf.message.DecodeError: If data is not a valid envelope
        """
        proto = LogEnvelopeProto()
        proto.ParseFromString(data)

        message = proto.log_message
        return LogEnvelope(
            routing_key=proto.routing_key,
            signature=proto.signature,
            log_message=LogMessage(
                app_id=message.app_id,
                body=message.message,
                message_type=MessageType(message.message_type),
                timestamp_nanos=message.timestamp,
                source_id=message.source_id if message.HasField("source_id") else None,
                source_name=(
                    message.source_name if message.HasField("source_name") else None
                ),
            ),
        )
