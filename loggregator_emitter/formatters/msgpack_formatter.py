"""
MessagePack formatter

Encodes envelopes as a msgpack map using the same field names as the
protobuf schema. Useful for collectors that do not speak protobuf.
"""

import msgpack

from loggregator_emitter.core.log_message import LogEnvelope
from loggregator_emitter.formatters.base_formatter import BaseFormatter


class MsgPackFormatter(BaseFormatter):
    """Format envelopes as msgpack maps."""

    name = "msgpack"

    def format(self, envelope: LogEnvelope) -> bytes:
        return msgpack.packb(envelope.to_dict(), use_bin_type=True)

    def parse(self, data: bytes) -> LogEnvelope:
        return LogEnvelope.from_dict(msgpack.unpackb(data, raw=False))
