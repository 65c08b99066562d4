"""
Log message and envelope data structures

A LogMessage carries one bounded log line; a LogEnvelope pairs it with a
routing key and the signature over its body.
"""

import time
from dataclasses import dataclass
from typing import Optional, Dict, Any, TYPE_CHECKING

from loggregator_emitter.core.app_id import AppId, AppIdLike
from loggregator_emitter.core.message_type import MessageType

if TYPE_CHECKING:
    from loggregator_emitter.security.message_signer import MessageSigner

MAX_MESSAGE_BYTES = (8 * 1024) - 512
TRUNCATED_MARKER = b"TRUNCATED"


@dataclass(frozen=True)
class LogMessage:
    """
    Single log line bound for Loggregator.

    The body is at most MAX_MESSAGE_BYTES long. Instances are created per
    emit call and never reused.
    """

    app_id: str
    body: bytes
    message_type: MessageType
    timestamp_nanos: int
    source_id: Optional[str] = None
    source_name: Optional[str] = None

    def __post_init__(self):
        """Validate log message after initialization."""
        if not isinstance(self.message_type, MessageType):
            raise TypeError("message_type must be MessageType enum")
        if len(self.body) > MAX_MESSAGE_BYTES:
            raise ValueError(
                f"message body exceeds {MAX_MESSAGE_BYTES} bytes: {len(self.body)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log message to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "app_id": self.app_id,
            "message": self.body,
            "message_type": self.message_type.name,
            "timestamp": self.timestamp_nanos,
            "source_id": self.source_id,
            "source_name": self.source_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogMessage":
        """
        Create log message from dictionary.

        Args:
            data: Dictionary with log message data

        Returns:
            New LogMessage instance
        """
        return cls(
            app_id=data["app_id"],
            body=data["message"],
            message_type=MessageType[data["message_type"]],
            timestamp_nanos=data["timestamp"],
            source_id=data.get("source_id"),
            source_name=data.get("source_name"),
        )


@dataclass(frozen=True)
class LogEnvelope:
    """Log message wrapped with its routing key and signature."""

    routing_key: str
    log_message: LogMessage
    signature: bytes

    def to_dict(self) -> Dict[str, Any]:
        """Convert envelope to dictionary."""
        return {
            "routing_key": self.routing_key,
            "log_message": self.log_message.to_dict(),
            "signature": self.signature,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEnvelope":
        """Create envelope from dictionary."""
        return cls(
            routing_key=data["routing_key"],
            log_message=LogMessage.from_dict(data["log_message"]),
            signature=data["signature"],
        )


def truncate_body(body: bytes) -> bytes:
    """
    Bound a message body to MAX_MESSAGE_BYTES.

    Oversized bodies are cut at the byte level and end in TRUNCATED_MARKER.
    The cut may split a multi-byte UTF-8 sequence.
    """
    if len(body) > MAX_MESSAGE_BYTES:
        return body[: MAX_MESSAGE_BYTES - len(TRUNCATED_MARKER)] + TRUNCATED_MARKER
    return body


def current_timestamp_nanos() -> int:
    """Wall-clock time in nanoseconds at millisecond precision."""
    return int(time.time() * 1000) * 1000000


def build_message(
    app_id: AppIdLike,
    text: str,
    message_type: MessageType,
    source_id: Optional[str] = None,
    source_name: Optional[str] = None,
) -> LogMessage:
    """
    Build a bounded log message.

    Args:
        app_id: Application guid as string, UUID or AppId
        text: Log line (unpaired surrogates are encoded as "?")
        message_type: OUT or ERR
        source_id: Source instance id (omitted if None)
        source_name: Source name (omitted if None)

    Returns:
        New LogMessage instance
    """
    return LogMessage(
        app_id=AppId.of(app_id).value,
        body=truncate_body(text.encode("utf-8", errors="replace")),
        message_type=message_type,
        timestamp_nanos=current_timestamp_nanos(),
        source_id=source_id,
        source_name=source_name,
    )


def build_envelope(message: LogMessage, signer: "MessageSigner") -> LogEnvelope:
    """
    Sign a log message and wrap it into an envelope.

    Only the message body is signed. Empty bodies are signed as well.

    Args:
        message: Log message to wrap
        signer: Signer holding the derived key

    Returns:
        New LogEnvelope instance
    """
    return LogEnvelope(
        routing_key=message.app_id,
        log_message=message,
        signature=signer.sign(message.body),
    )
