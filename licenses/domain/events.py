"""
License domain events.

Domain events represent something that happened in the license domain.
They are keyed by the license key, which is the license's identity.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseCreated(DomainEvent):
    """Event raised when a license is issued."""

    def __init__(
        self,
        key: str,
        expiration_date: Optional[datetime],
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseCreated event.

        Args:
            key: License key
            expiration_date: Expiration at issue time, if any
            occurred_at: When the event occurred
        """
        super().__init__(**self.new_metadata(key, occurred_at))
        self.key = key
        self.expiration_date = expiration_date

    def payload(self) -> Dict[str, Any]:
        return {
            "expiration_date": (
                self.expiration_date.isoformat() if self.expiration_date else None
            ),
        }


class LicenseExtended(DomainEvent):
    """Event raised when a license expiration moves forward."""

    def __init__(
        self,
        key: str,
        previous_expiration: datetime,
        new_expiration: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseExtended event.

        Args:
            key: License key
            previous_expiration: Expiration before the extension
            new_expiration: Expiration after the extension
            occurred_at: When the event occurred
        """
        super().__init__(**self.new_metadata(key, occurred_at))
        self.key = key
        self.previous_expiration = previous_expiration
        self.new_expiration = new_expiration

    def payload(self) -> Dict[str, Any]:
        return {
            "previous_expiration": self.previous_expiration.isoformat(),
            "new_expiration": self.new_expiration.isoformat(),
        }


class LicenseRevoked(DomainEvent):
    """Event raised the first time a license is revoked."""

    def __init__(
        self,
        key: str,
        revoked_at: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseRevoked event.

        Args:
            key: License key
            revoked_at: Revocation timestamp stored on the license
            occurred_at: When the event occurred
        """
        super().__init__(**self.new_metadata(key, occurred_at))
        self.key = key
        self.revoked_at = revoked_at

    def payload(self) -> Dict[str, Any]:
        return {"revoked_at": self.revoked_at.isoformat()}
