"""
Error types raised by the emitter

Every failure is surfaced to the caller as a subclass of LoggregatorError.
"""


class LoggregatorError(RuntimeError):
    """Base class for all errors raised while emitting to Loggregator."""


class CryptoInitError(LoggregatorError):
    """Key derivation or cipher setup failed."""


class CryptoOperationError(LoggregatorError):
    """Signing a message body failed."""


class BadPaddingError(LoggregatorError):
    """Padded data does not end in a valid 0x80 marker."""


class TransportInitError(LoggregatorError):
    """The datagram channel could not be opened, connected or configured."""


class TransportWriteError(LoggregatorError):
    """A datagram could not be written to the transport."""


class TransportCloseError(LoggregatorError):
    """The transport failed while being released."""
