"""Application identifier accepted by the emitter"""

import uuid
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AppId:
    """
    Application identifier normalized to its canonical string form.

    Loggregator routes messages by application guid. Callers may hold the
    guid either as a plain string or as a ``uuid.UUID``; both are reduced
    to the same string so the resulting envelopes are identical.
    """

    value: str

    def __post_init__(self):
        """Validate identifier type."""
        if not isinstance(self.value, str):
            raise TypeError("AppId value must be a string")

    @classmethod
    def from_string(cls, value: str) -> "AppId":
        """Create identifier from a raw string."""
        return cls(value)

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> "AppId":
        """Create identifier from a UUID (lower-case, hyphenated form)."""
        return cls(str(value))

    @classmethod
    def of(cls, value: Union[str, uuid.UUID, "AppId"]) -> "AppId":
        """
        Normalize any supported identifier representation.

        Args:
            value: A string, UUID or AppId

        Returns:
            AppId instance

        Raises:
            TypeError: If value is of an unsupported type
        """
        if isinstance(value, AppId):
            return value
        if isinstance(value, uuid.UUID):
            return cls.from_uuid(value)
        if isinstance(value, str):
            return cls.from_string(value)
        raise TypeError(
            f"app_id must be str, uuid.UUID or AppId, got {type(value).__name__}"
        )

    def __str__(self) -> str:
        return self.value


AppIdLike = Union[str, uuid.UUID, AppId]
