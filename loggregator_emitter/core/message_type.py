"""
Message type enumeration

Values match the MessageType enum of the Loggregator wire schema.
"""

from enum import IntEnum


class MessageType(IntEnum):
    """Stream a log line belongs to."""

    OUT = 1     # Standard output
    ERR = 2     # Standard error
