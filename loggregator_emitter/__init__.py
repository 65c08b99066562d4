"""
Loggregator Emitter - signed log shipping over UDP

Packages application log lines into signed, size-bounded envelopes and
sends them to a Loggregator server.
"""

__version__ = "1.0.0"

from loggregator_emitter.core.app_id import AppId
from loggregator_emitter.core.emitter import (
    Emitter,
    create_emitter,
    create_emitter_for_address,
)
from loggregator_emitter.core.emitter_config import EmitterConfig
from loggregator_emitter.core.exceptions import (
    BadPaddingError,
    CryptoInitError,
    CryptoOperationError,
    LoggregatorError,
    TransportCloseError,
    TransportInitError,
    TransportWriteError,
)
from loggregator_emitter.core.log_message import LogEnvelope, LogMessage
from loggregator_emitter.core.message_type import MessageType

# Import submodules (not all classes by default)
from loggregator_emitter import formatters
from loggregator_emitter import security

__all__ = [
    "AppId",
    "Emitter",
    "create_emitter",
    "create_emitter_for_address",
    "EmitterConfig",
    "LogEnvelope",
    "LogMessage",
    "MessageType",
    "LoggregatorError",
    "CryptoInitError",
    "CryptoOperationError",
    "BadPaddingError",
    "TransportInitError",
    "TransportWriteError",
    "TransportCloseError",
    "formatters",
    "security",
]
