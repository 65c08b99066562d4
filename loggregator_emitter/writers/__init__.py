"""Writers module - Transport for serialized envelopes"""

from loggregator_emitter.writers.datagram_writer import DatagramWriter

__all__ = ["DatagramWriter"]
