"""
Emitter - client for sending log lines to Loggregator

Each emit call builds one message, signs it, serializes the envelope and
writes exactly one datagram. Nothing is batched, queued or retried.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack, suppress
from typing import Optional, Tuple

from loggregator_emitter.core.app_id import AppIdLike
from loggregator_emitter.core.emitter_config import EmitterConfig
from loggregator_emitter.core.exceptions import TransportCloseError
from loggregator_emitter.core.log_message import (
    LogEnvelope,
    build_envelope,
    build_message,
)
from loggregator_emitter.core.message_type import MessageType
from loggregator_emitter.security.message_signer import MessageSigner
from loggregator_emitter.writers.datagram_writer import DatagramWriter

logger = logging.getLogger(__name__)


class Emitter:
    """
    Client for emitting logging events to Loggregator.

    Use create_emitter() to obtain an instance. The transport, key and
    configuration are fixed for the emitter's lifetime.

    Thread Safety:
        Envelopes are built from immutable state and the transport
        serializes writes, so an emitter may be shared between threads.

    Example:
        with create_emitter("loggregator.example.com", 3456, "secret") as emitter:
            emitter.emit("1b2c...", "application started")
            emitter.emit_error(uuid.UUID("1b2c..."), "something failed")
    """

    def __init__(self, writer: DatagramWriter, signer: MessageSigner, config: EmitterConfig):
        self._writer = writer
        self._signer = signer
        self._config = config

    @property
    def config(self) -> EmitterConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._writer.closed

    def emit(self, app_id: AppIdLike, message: str) -> None:
        """
        Emit a message to Loggregator.

        Args:
            app_id: The guid of the application (string, UUID or AppId)
            message: The message to emit

        Raises:
            CryptoOperationError: If signing fails
            TransportWriteError: If the datagram cannot be written
        """
        self._send(app_id, message, MessageType.OUT)

    def emit_error(self, app_id: AppIdLike, message: str) -> None:
        """
        Emit an error message to Loggregator.

        Args:
            app_id: The guid of the application (string, UUID or AppId)
            message: The message to emit

        Raises:
            CryptoOperationError: If signing fails
            TransportWriteError: If the datagram cannot be written
        """
        self._send(app_id, message, MessageType.ERR)

    def build_envelope(
        self, app_id: AppIdLike, message: str, message_type: MessageType
    ) -> LogEnvelope:
        """Build the signed envelope for a message without sending it."""
        log_message = build_message(
            app_id,
            message,
            message_type,
            source_id=self._config.source_id,
            source_name=self._config.source_name,
        )
        return build_envelope(log_message, self._signer)

    def _send(self, app_id: AppIdLike, message: str, message_type: MessageType) -> None:
        envelope = self.build_envelope(app_id, message, message_type)
        self._writer.write(self._config.formatter.format(envelope))

    def close(self) -> None:
        """
        Release the transport.

        Only the first call has an effect.

        Raises:
            TransportCloseError: If the socket fails to close
        """
        if self._writer.closed:
            return
        self._writer.close()
        logger.debug("emitter for %s:%s closed", self._writer.host, self._writer.port)

    def __enter__(self) -> "Emitter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def _close_quietly(writer: DatagramWriter) -> None:
    """Close writer, ignoring errors from the close itself."""
    with suppress(TransportCloseError):
        writer.close()


def create_emitter_for_address(
    address: Tuple[str, int],
    secret: str,
    config: Optional[EmitterConfig] = None,
) -> Emitter:
    """
    Create an emitter for the provided Loggregator address.

    The socket is opened first; if connecting, configuring it or deriving
    the signing key fails afterwards, it is closed before the error
    propagates.

    Args:
        address: (host, port) of the Loggregator server
        secret: Shared secret used for authenticating logging events
        config: Emitter configuration (default: EmitterConfig.default())

    Returns:
        Ready-to-use Emitter

    Raises:
        TransportInitError: If the datagram channel cannot be set up
        CryptoInitError: If the signing key cannot be derived
    """
    config = config or EmitterConfig.default()
    host, port = address

    writer = DatagramWriter(host, port)
    with ExitStack() as stack:
        writer.open()
        stack.callback(_close_quietly, writer)

        writer.connect()
        writer.configure_blocking(config.blocking)
        signer = MessageSigner(secret)

        stack.pop_all()

    logger.debug(
        "emitter for %s:%s created (blocking=%s, source_name=%s, source_id=%s)",
        host, port, config.blocking, config.source_name, config.source_id,
    )
    return Emitter(writer, signer, config)


def create_emitter(
    host: str,
    port: int,
    secret: str,
    config: Optional[EmitterConfig] = None,
) -> Emitter:
    """
    Create an emitter sending to the provided host.

    Args:
        host: The Loggregator host that events are sent to
        port: The port the Loggregator host is listening for events on
        secret: The shared secret used for authenticating logging events
        config: Emitter configuration (default: EmitterConfig.default())

    Returns:
        Ready-to-use Emitter
    """
    return create_emitter_for_address((host, port), secret, config)
