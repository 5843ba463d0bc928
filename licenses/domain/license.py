"""
License domain entity.

This is the core domain entity representing an issued license.
It owns the lifecycle state machine and is independent of infrastructure.

States are Active, Expired and Revoked. Expired is never stored: it is
derived from ``expiration_date`` at read time. Revoked is terminal and
dominates any expiration computation.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional

from core.domain.events import utc_now
from core.domain.exceptions import InvalidExtensionError, LicenseAlreadyRevokedError
from core.domain.value_objects import LicenseStatus


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    An immutable record; every transition returns a new instance.
    ``extra_data`` is caller-owned and never inspected here.
    """

    key: str
    expiration_date: Optional[datetime]
    extra_data: Any
    revoked: bool
    revoked_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.key or not self.key.strip():
            raise ValueError("License key is required")
        if self.expiration_date is not None:
            if not isinstance(self.expiration_date, datetime):
                raise ValueError("Expiration date must be a datetime")
            if not _is_aware(self.expiration_date):
                raise ValueError("Expiration date must be timezone-aware")
        if self.revoked and self.revoked_at is None:
            raise ValueError("Revoked license must record when it was revoked")
        if not self.revoked and self.revoked_at is not None:
            raise ValueError("Only a revoked license can have a revocation time")

    @classmethod
    def create(
        cls,
        key: str,
        expiration_date: Optional[datetime] = None,
        extra_data: Any = None,
    ) -> "License":
        """
        Create a new, unrevoked License entity.

        Args:
            key: Freshly generated license key
            expiration_date: Optional aware expiration datetime
            extra_data: Optional opaque payload

        Returns:
            License entity instance
        """
        now = utc_now()
        return cls(
            key=key,
            expiration_date=expiration_date,
            extra_data=extra_data,
            revoked=False,
            revoked_at=None,
            created_at=now,
            updated_at=now,
        )

    def status(self, current_time: Optional[datetime] = None) -> LicenseStatus:
        """
        Derive the license status.

        Args:
            current_time: Evaluation time (defaults to now)

        Returns:
            REVOKED if revoked, EXPIRED if the expiration is not in the
            future, otherwise ACTIVE
        """
        if self.revoked:
            return LicenseStatus.REVOKED
        if self.expiration_date is not None:
            check_time = current_time or utc_now()
            if self.expiration_date <= check_time:
                return LicenseStatus.EXPIRED
        return LicenseStatus.ACTIVE

    def extend(self, new_expiration: datetime) -> "License":
        """
        Create a new License instance with a later expiration.

        Args:
            new_expiration: New aware expiration datetime

        Returns:
            New License instance with updated expiration

        Raises:
            LicenseAlreadyRevokedError: If the license is revoked
            InvalidExtensionError: If the license never expires or the new
                expiration is not strictly later than the current one
        """
        if not isinstance(new_expiration, datetime) or not _is_aware(new_expiration):
            raise ValueError("New expiration must be a timezone-aware datetime")
        if self.revoked:
            raise LicenseAlreadyRevokedError(f"License {self.key} is revoked")
        if self.expiration_date is None:
            raise InvalidExtensionError(
                f"License {self.key} has no expiration date to extend"
            )
        if new_expiration <= self.expiration_date:
            raise InvalidExtensionError(
                f"New expiration {new_expiration.isoformat()} is not after "
                f"current expiration {self.expiration_date.isoformat()}"
            )

        return replace(self, expiration_date=new_expiration, updated_at=utc_now())

    def revoke(self) -> "License":
        """
        Create a new License instance marked revoked.

        Revoking a revoked license returns it unchanged, so the first
        revocation time is kept.

        Returns:
            Revoked License instance
        """
        if self.revoked:
            return self

        now = utc_now()
        return replace(self, revoked=True, revoked_at=now, updated_at=now)
