"""
Envelope formatters module

Provides serializers that turn envelopes into datagram payloads.
"""

from typing import Dict

from loggregator_emitter.formatters.base_formatter import BaseFormatter
from loggregator_emitter.formatters.protobuf_formatter import ProtobufFormatter
from loggregator_emitter.formatters.msgpack_formatter import MsgPackFormatter

_FORMATTERS: Dict[str, type] = {
    ProtobufFormatter.name: ProtobufFormatter,
    MsgPackFormatter.name: MsgPackFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """
    Look up a formatter by name.

    Args:
        name: "protobuf" or "msgpack"

    Returns:
        New formatter instance

    Raises:
        ValueError: If no formatter has that name
    """
    if name not in _FORMATTERS:
        raise ValueError(f"Unknown formatter: {name}")
    return _FORMATTERS[name]()


__all__ = [
    "BaseFormatter",
    "ProtobufFormatter",
    "MsgPackFormatter",
    "get_formatter",
]
