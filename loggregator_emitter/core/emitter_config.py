"""
Emitter configuration management

Settings are fixed when an emitter is created and apply to every message
it sends.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from loggregator_emitter.formatters.base_formatter import BaseFormatter
from loggregator_emitter.formatters.protobuf_formatter import ProtobufFormatter

DEFAULT_SOURCE_NAME = "UNKNOWN"
DEFAULT_SOURCE_ID = "0"


@dataclass(frozen=True)
class EmitterConfig:
    """
    Emitter configuration.

    Immutable; the with_* helpers return modified copies so configurations
    can be chained the way builders are:

        config = (EmitterConfig()
            .with_blocking(True)
            .with_source_name("App")
            .with_source_id("3"))
    """

    # Transport settings
    blocking: bool = False

    # Source settings (attached to every message when not None)
    source_name: Optional[str] = DEFAULT_SOURCE_NAME
    source_id: Optional[str] = DEFAULT_SOURCE_ID

    # Wire format
    formatter: BaseFormatter = field(default_factory=ProtobufFormatter, compare=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.blocking, bool):
            raise TypeError("blocking must be a bool")
        if self.source_name is not None and not isinstance(self.source_name, str):
            raise TypeError("source_name must be a string or None")
        if self.source_id is not None and not isinstance(self.source_id, str):
            raise TypeError("source_id must be a string or None")
        if not isinstance(self.formatter, BaseFormatter):
            raise TypeError("formatter must be a BaseFormatter")

    def with_blocking(self, blocking: bool = True) -> "EmitterConfig":
        """Return a copy that waits until each datagram has been sent."""
        return replace(self, blocking=blocking)

    def with_source_name(self, source_name: Optional[str]) -> "EmitterConfig":
        """Return a copy with a different source name."""
        return replace(self, source_name=source_name)

    def with_source_id(self, source_id: Optional[str]) -> "EmitterConfig":
        """Return a copy with a different source instance id."""
        return replace(self, source_id=source_id)

    def with_formatter(self, formatter: BaseFormatter) -> "EmitterConfig":
        """Return a copy using a different wire format."""
        return replace(self, formatter=formatter)

    @classmethod
    def default(cls) -> "EmitterConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def blocking_config(cls) -> "EmitterConfig":
        """Create configuration with a blocking transport."""
        return cls(blocking=True)
