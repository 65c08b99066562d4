"""
Datagram writer for Loggregator

Sends serialized envelopes to a Loggregator server over a connected UDP
socket. Delivery is fire-and-forget: there is no buffering, retry or
reconnect, and every failure is raised to the caller.
"""

from __future__ import annotations

import logging
import socket
import threading
from typing import Optional

from loggregator_emitter.core.exceptions import (
    TransportCloseError,
    TransportInitError,
    TransportWriteError,
)

logger = logging.getLogger(__name__)


class DatagramWriter:
    """
    UDP writer bound to a single Loggregator peer.

    Lifecycle is open() -> connect() -> configure_blocking() -> write()* ->
    close(). The socket is connected, so each write() is a single send()
    of one datagram.

    Thread Safety:
        write() and close() hold an internal lock, so one writer may be
        shared between threads.

    Example:
        writer = DatagramWriter("loggregator.example.com", 3456)
        writer.open()
        try:
            writer.connect()
            writer.configure_blocking(False)
            writer.write(payload)
        finally:
            writer.close()
    """

    def __init__(self, host: str, port: int):
        """
        Initialize datagram writer.

        Args:
            host: Loggregator host address
            port: Loggregator UDP port
        """
        self.host = host
        self.port = port

        self._socket: Optional[socket.socket] = None
        self._sockaddr = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def address(self):
        return (self.host, self.port)

    def _resolve(self):
        """Resolve the peer address to (family, sockaddr)."""
        if not isinstance(self.port, int) or not 0 < self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port!r}")
        infos = socket.getaddrinfo(
            self.host, self.port, type=socket.SOCK_DGRAM
        )
        family, _, _, _, sockaddr = infos[0]
        return family, sockaddr

    def open(self) -> None:
        """
        Create the UDP socket.

        Raises:
            TransportInitError: If the peer cannot be resolved or the
                socket cannot be created
        """
        if self._socket is not None:
            return
        try:
            family, self._sockaddr = self._resolve()
            self._socket = socket.socket(family, socket.SOCK_DGRAM)
        except (OSError, ValueError) as e:
            raise TransportInitError(
                f"Unable to open datagram channel to {self.host}:{self.port}: {e}"
            ) from e
        logger.debug("opened datagram channel for %s:%s", self.host, self.port)

    def connect(self) -> None:
        """
        Connect the socket to the Loggregator peer.

        Raises:
            TransportInitError: If the socket is not open or connect fails
        """
        if self._socket is None:
            raise TransportInitError("Datagram channel is not open")
        try:
            self._socket.connect(self._sockaddr)
        except (OSError, OverflowError) as e:
            raise TransportInitError(
                f"Unable to connect to {self.host}:{self.port}: {e}"
            ) from e
        logger.debug("connected datagram channel to %s:%s", self.host, self.port)

    def configure_blocking(self, blocking: bool) -> None:
        """
        Set blocking mode of the socket.

        Raises:
            TransportInitError: If the socket is not open or cannot be configured
        """
        if self._socket is None:
            raise TransportInitError("Datagram channel is not open")
        try:
            self._socket.setblocking(blocking)
        except OSError as e:
            raise TransportInitError(f"Unable to configure blocking mode: {e}") from e

    def write(self, data: bytes) -> int:
        """
        Send one datagram.

        Args:
            data: Serialized envelope

        Returns:
            Number of bytes written

        Raises:
            TransportWriteError: If the writer is closed, the send fails,
                would block, or writes only part of the datagram
        """
        with self._lock:
            if self._closed or self._socket is None:
                raise TransportWriteError("Datagram channel is closed")
            try:
                sent = self._socket.send(data)
            except OSError as e:
                raise TransportWriteError(
                    f"Unable to write {len(data)} bytes to {self.host}:{self.port}: {e}"
                ) from e

        if sent != len(data):
            raise TransportWriteError(
                f"Partial write to {self.host}:{self.port}: {sent} of {len(data)} bytes"
            )
        return sent

    def close(self) -> None:
        """
        Close the socket and release resources.

        Safe to call more than once; only the first call closes the socket.

        Raises:
            TransportCloseError: If closing the socket fails
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            sock, self._socket = self._socket, None

        if sock is not None:
            try:
                sock.close()
            except OSError as e:
                raise TransportCloseError(f"Unable to close datagram channel: {e}") from e
            logger.debug("closed datagram channel for %s:%s", self.host, self.port)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "DatagramWriter":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
