"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    key: str
    status: str
    expiration_date: Optional[datetime]
    extra_data: Any
    revoked: bool
    revoked_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, license: License, current_time: Optional[datetime] = None
    ) -> "LicenseDTO":
        """
        Build a DTO, deriving status at ``current_time``.

        Args:
            license: License entity
            current_time: Evaluation time (defaults to now)

        Returns:
            LicenseDTO
        """
        return cls(
            key=license.key,
            status=license.status(current_time).value,
            expiration_date=license.expiration_date,
            extra_data=license.extra_data,
            revoked=license.revoked,
            revoked_at=license.revoked_at,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )
