"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import json
from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

MAX_LICENSE_KEY_LENGTH = 128


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class LicenseKeyValue(ValueObject):
    """
    Shape check for a license key supplied by a caller.

    Keys are opaque: only emptiness, length and whitespace are checked,
    never the generator's format.
    """

    value: str

    def __post_init__(self):
        """Validate key shape."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("License key cannot be empty")
        if len(self.value) > MAX_LICENSE_KEY_LENGTH:
            raise ValueError("License key too long")
        if any(ch.isspace() for ch in self.value):
            raise ValueError(f"Invalid license key format: {self.value!r}")

    def __str__(self) -> str:
        """Return key as string."""
        return self.value


@dataclass(frozen=True)
class Timestamp(ValueObject):
    """An absolute point in time; naive datetimes are rejected."""

    value: datetime

    def __post_init__(self):
        """Validate timestamp."""
        if not isinstance(self.value, datetime):
            raise ValueError(f"Expected a datetime, got {type(self.value).__name__}")
        if self.value.tzinfo is None or self.value.utcoffset() is None:
            raise ValueError("Timestamp must be timezone-aware")
        # Storage normalizes to UTC; the offset may push the value past year 1 or 9999.
        try:
            self.value.astimezone(timezone.utc)
        except OverflowError as e:
            raise ValueError("Timestamp out of range") from e

    def __str__(self) -> str:
        """Return timestamp in ISO 8601."""
        return self.value.isoformat()


@dataclass(frozen=True)
class OpaquePayload(ValueObject):
    """Caller-owned JSON payload, checked only for storability."""

    value: Any

    def __post_init__(self):
        """Validate the payload can be stored as JSON."""
        try:
            json.dumps(self.value, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ValueError(f"extra_data is not JSON serializable: {e}") from e

    def __hash__(self):
        return hash(json.dumps(self.value, sort_keys=True))


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value
