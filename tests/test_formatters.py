"""Tests for envelope formatters"""

import msgpack
import pytest
from google.protobuf.message import DecodeError

from loggregator_emitter import LogEnvelope, LogMessage, MessageType
from loggregator_emitter.formatters import (
    BaseFormatter,
    MsgPackFormatter,
    ProtobufFormatter,
    get_formatter,
)
from loggregator_emitter.formatters.protobuf_formatter import LogEnvelopeProto


def make_envelope(source_id="0", source_name="UNKNOWN", body=b"hello world"):
    return LogEnvelope(
        routing_key="app-123",
        log_message=LogMessage(
            app_id="app-123",
            body=body,
            message_type=MessageType.ERR,
            timestamp_nanos=1380000000123000000,
            source_id=source_id,
            source_name=source_name,
        ),
        signature=b"\x01" * 64,
    )


class TestProtobufFormatter:
    """Test Loggregator protobuf wire format."""

    def test_fields_on_wire(self):
        data = ProtobufFormatter().format(make_envelope())

        proto = LogEnvelopeProto()
        proto.ParseFromString(data)

        assert proto.routing_key == "app-123"
        assert proto.signature == b"\x01" * 64
        assert proto.log_message.message == b"hello world"
        assert proto.log_message.message_type == 2
        assert proto.log_message.timestamp == 1380000000123000000
        assert proto.log_message.app_id == "app-123"
        assert proto.log_message.source_id == "0"
        assert proto.log_message.source_name == "UNKNOWN"

    def test_field_numbers(self):
        """Test the schema uses Loggregator's field numbers."""
        fields = {
            f.name: f.number
            for f in LogEnvelopeProto.DESCRIPTOR.fields_by_name["log_message"].message_type.fields
        }
        assert fields == {
            "message": 1,
            "message_type": 2,
            "timestamp": 3,
            "app_id": 4,
            "source_id": 6,
            "drain_urls": 7,
            "source_name": 8,
        }
        assert LogEnvelopeProto.DESCRIPTOR.full_name == "logmessage.LogEnvelope"

    def test_envelope_starts_with_routing_key(self):
        data = ProtobufFormatter().format(make_envelope())
        # field 1, wire type 2, length 7
        assert data[:9] == b"\x0a\x07app-123"

    def test_parse(self):
        formatter = ProtobufFormatter()
        envelope = make_envelope()
        assert formatter.parse(formatter.format(envelope)) == envelope

    def test_optional_sources_omitted(self):
        formatter = ProtobufFormatter()
        data = formatter.format(make_envelope(source_id=None, source_name=None))

        proto = LogEnvelopeProto()
        proto.ParseFromString(data)
        assert not proto.log_message.HasField("source_id")
        assert not proto.log_message.HasField("source_name")

        parsed = formatter.parse(data)
        assert parsed.log_message.source_id is None
        assert parsed.log_message.source_name is None

    def test_empty_body(self):
        formatter = ProtobufFormatter()
        envelope = make_envelope(body=b"")
        assert formatter.parse(formatter.format(envelope)).log_message.body == b""

    def test_parse_garbage(self):
        with pytest.raises(DecodeError):
            ProtobufFormatter().parse(b"\xff\xff\xff")

    def test_callable(self):
        formatter = ProtobufFormatter()
        envelope = make_envelope()
        assert formatter(envelope) == formatter.format(envelope)


class TestMsgPackFormatter:
    """Test msgpack wire format."""

    def test_map_fields(self):
        data = MsgPackFormatter().format(make_envelope())
        decoded = msgpack.unpackb(data, raw=False)

        assert decoded["routing_key"] == "app-123"
        assert decoded["signature"] == b"\x01" * 64
        assert decoded["log_message"]["message"] == b"hello world"
        assert decoded["log_message"]["message_type"] == "ERR"

    def test_parse(self):
        formatter = MsgPackFormatter()
        envelope = make_envelope(source_name=None)
        assert formatter.parse(formatter.format(envelope)) == envelope


class TestFormatterRegistry:
    """Test formatter lookup."""

    def test_get_formatter(self):
        assert isinstance(get_formatter("protobuf"), ProtobufFormatter)
        assert isinstance(get_formatter("msgpack"), MsgPackFormatter)

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseFormatter()
