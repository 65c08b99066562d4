"""
Base formatter interface

Formatters turn envelopes into datagram payloads.
"""

from abc import ABC, abstractmethod

from loggregator_emitter.core.log_message import LogEnvelope


class BaseFormatter(ABC):
    """
    Abstract base class for envelope formatters.

    Formatters convert LogEnvelope objects into the bytes written to the
    transport, and back.
    """

    name = "base"

    @abstractmethod
    def format(self, envelope: LogEnvelope) -> bytes:
        """
        Serialize an envelope.

        Args:
            envelope: The envelope to serialize

        Returns:
            Wire representation of the envelope
        """
        pass

    @abstractmethod
    def parse(self, data: bytes) -> LogEnvelope:
        """
        Deserialize an envelope.

        Args:
            data: Wire representation produced by format()

        Returns:
            The decoded envelope
        """
        pass

    def __call__(self, envelope: LogEnvelope) -> bytes:
        """Allow formatters to be callable."""
        return self.format(envelope)
