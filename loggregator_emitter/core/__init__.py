"""
Core module for the Loggregator emitter

This module contains the fundamental classes:
- Emitter: Client that signs and sends log lines
- EmitterConfig: Construction-time configuration
- LogMessage / LogEnvelope: Message and envelope data structures
- MessageType: OUT / ERR enumeration
- AppId: Application identifier
"""

from loggregator_emitter.core.app_id import AppId
from loggregator_emitter.core.message_type import MessageType
from loggregator_emitter.core.log_message import (
    MAX_MESSAGE_BYTES,
    TRUNCATED_MARKER,
    LogEnvelope,
    LogMessage,
    build_envelope,
    build_message,
)
from loggregator_emitter.core.emitter_config import EmitterConfig
from loggregator_emitter.core.emitter import (
    Emitter,
    create_emitter,
    create_emitter_for_address,
)

__all__ = [
    "AppId",
    "MessageType",
    "MAX_MESSAGE_BYTES",
    "TRUNCATED_MARKER",
    "LogEnvelope",
    "LogMessage",
    "build_envelope",
    "build_message",
    "EmitterConfig",
    "Emitter",
    "create_emitter",
    "create_emitter_for_address",
]
