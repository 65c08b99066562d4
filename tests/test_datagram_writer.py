"""Tests for datagram writer functionality"""

import socket
import threading
from unittest.mock import MagicMock, patch

import pytest

from loggregator_emitter.core.exceptions import (
    TransportCloseError,
    TransportInitError,
    TransportWriteError,
)
from loggregator_emitter.writers import DatagramWriter


@pytest.fixture
def receiver():
    """Loopback UDP socket standing in for a Loggregator server."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def open_writer(port, blocking=True):
    writer = DatagramWriter("127.0.0.1", port)
    writer.open()
    writer.connect()
    writer.configure_blocking(blocking)
    return writer


class TestDatagramWriter:
    """Test datagram writer functionality."""

    def test_initialization(self):
        """Test writer initialization."""
        writer = DatagramWriter(host="localhost", port=3456)

        assert writer.host == "localhost"
        assert writer.port == 3456
        assert writer.address == ("localhost", 3456)
        assert writer.closed is False

    def test_open_creates_datagram_socket(self):
        """Test socket creation for UDP."""
        writer = DatagramWriter("127.0.0.1", 3456)
        writer.open()

        assert writer._socket.type == socket.SOCK_DGRAM
        writer.close()

    def test_write_delivers_datagram(self, receiver):
        """Test that each write is one datagram."""
        writer = open_writer(receiver.getsockname()[1])

        assert writer.write(b"first") == 5
        assert writer.write(b"second") == 6

        assert receiver.recv(65535) == b"first"
        assert receiver.recv(65535) == b"second"
        writer.close()

    def test_non_blocking_write(self, receiver):
        writer = open_writer(receiver.getsockname()[1], blocking=False)

        assert writer._socket.getblocking() is False
        writer.write(b"payload")
        assert receiver.recv(65535) == b"payload"
        writer.close()

    def test_invalid_port(self):
        """Test that an out-of-range port fails to open."""
        writer = DatagramWriter("127.0.0.1", 70000)

        with pytest.raises(TransportInitError):
            writer.open()
        assert writer._socket is None

    def test_connect_before_open(self):
        writer = DatagramWriter("127.0.0.1", 3456)
        with pytest.raises(TransportInitError, match="not open"):
            writer.connect()

    def test_connect_failure(self):
        """Test that connect errors are wrapped."""
        writer = DatagramWriter("127.0.0.1", 3456)
        writer._sockaddr = ("127.0.0.1", 3456)
        writer._socket = MagicMock()
        writer._socket.connect.side_effect = OSError("Network is unreachable")

        with pytest.raises(TransportInitError, match="unreachable"):
            writer.connect()

    def test_write_error_not_retried(self):
        """Test that send errors surface once and are not retried."""
        writer = DatagramWriter("127.0.0.1", 3456)
        writer._socket = MagicMock()
        writer._socket.send.side_effect = OSError("Message too long")

        with pytest.raises(TransportWriteError, match="too long"):
            writer.write(b"payload")
        writer._socket.send.assert_called_once_with(b"payload")

    def test_would_block(self):
        """Test that a non-blocking send that would block is surfaced."""
        writer = DatagramWriter("127.0.0.1", 3456)
        writer._socket = MagicMock()
        writer._socket.send.side_effect = BlockingIOError()

        with pytest.raises(TransportWriteError):
            writer.write(b"payload")

    def test_partial_write(self):
        writer = DatagramWriter("127.0.0.1", 3456)
        writer._socket = MagicMock()
        writer._socket.send.return_value = 3

        with pytest.raises(TransportWriteError, match="Partial write"):
            writer.write(b"payload")

    def test_write_after_close(self, receiver):
        writer = open_writer(receiver.getsockname()[1])
        writer.close()

        with pytest.raises(TransportWriteError, match="closed"):
            writer.write(b"payload")

    def test_close_once(self):
        """Test that the socket is released exactly once."""
        writer = DatagramWriter("127.0.0.1", 3456)
        mock_socket = MagicMock()
        writer._socket = mock_socket

        writer.close()
        writer.close()

        mock_socket.close.assert_called_once()
        assert writer.closed is True

    def test_close_error(self):
        writer = DatagramWriter("127.0.0.1", 3456)
        writer._socket = MagicMock()
        writer._socket.close.side_effect = OSError("Bad file descriptor")

        with pytest.raises(TransportCloseError):
            writer.close()
        assert writer.closed is True

    def test_context_manager(self):
        """Test context manager protocol."""
        with patch.object(DatagramWriter, "close") as mock_close:
            with DatagramWriter("127.0.0.1", 3456) as writer:
                assert writer._socket is not None
            mock_close.assert_called_once()
        writer._socket.close()

    def test_concurrent_writes(self, receiver):
        """Test that concurrent writers each deliver whole datagrams."""
        writer = open_writer(receiver.getsockname()[1])
        payloads = [f"message-{i}".encode() for i in range(20)]

        threads = [threading.Thread(target=writer.write, args=(p,)) for p in payloads]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        received = {receiver.recv(65535) for _ in payloads}
        assert received == set(payloads)
        writer.close()
