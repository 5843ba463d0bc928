"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity: key assignment against the store and
the atomic lifecycle transitions.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Tuple

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    InvalidLicenseInputError,
    LicenseKeyGenerationError,
    LicenseNotFoundError,
)
from licenses.domain.license import License
from licenses.domain.license_key import DEFAULT_KEY_PREFIX, generate_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_KEY_ATTEMPTS = 10


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    def __init__(self, prefix: str = DEFAULT_KEY_PREFIX):
        # Fail at wiring time rather than on the first create.
        generate_license_key(prefix)
        self.prefix = prefix

    def generate(self) -> str:
        """
        Generate a license key.

        Returns:
            Generated license key string
        """
        return generate_license_key(self.prefix)

    def __call__(self) -> str:
        return self.generate()


class LicenseRegistry:
    """
    Owns license records and every state transition on them.

    Creation assigns a key that has never been issued. Extend and revoke
    run as a single read-modify-write per key through
    ``LicenseRepository.update``, so they never interleave.
    """

    def __init__(
        self,
        repository: LicenseRepository,
        key_generator: Optional[Callable[[], str]] = None,
        max_key_attempts: int = DEFAULT_MAX_KEY_ATTEMPTS,
    ):
        """
        Initialize registry.

        Args:
            repository: License store
            key_generator: Zero-argument callable returning a fresh key
            max_key_attempts: Keys to try before giving up on creation
        """
        if max_key_attempts < 1:
            raise ValueError("max_key_attempts must be at least 1")
        self.repository = repository
        self.key_generator = key_generator or LicenseKeyGenerator()
        self.max_key_attempts = max_key_attempts

    async def create_license(
        self,
        expiration_date: Optional[datetime] = None,
        extra_data: Any = None,
    ) -> License:
        """
        Issue a new license under a fresh unique key.

        A key collision is retried with a new key and never reported.

        Args:
            expiration_date: Optional aware expiration datetime
            extra_data: Optional opaque payload

        Returns:
            Stored License entity

        Raises:
            InvalidLicenseInputError: If the license is structurally invalid
            LicenseKeyGenerationError: If no unique key could be found
        """
        for attempt in range(1, self.max_key_attempts + 1):
            key = self.key_generator()
            try:
                license = License.create(
                    key=key,
                    expiration_date=expiration_date,
                    extra_data=extra_data,
                )
            except ValueError as e:
                raise InvalidLicenseInputError(str(e)) from e

            try:
                return await self.repository.add(license)
            except DuplicateLicenseKeyError:
                logger.warning(
                    "Generated license key collided, retrying",
                    extra={"attempt": attempt, "max_attempts": self.max_key_attempts},
                )

        raise LicenseKeyGenerationError(
            f"Could not generate a unique license key in {self.max_key_attempts} attempts"
        )

    async def get_license(self, key: str) -> License:
        """
        Look up a license.

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        license = await self.repository.find_by_key(key)
        if license is None:
            raise LicenseNotFoundError(f"License {key} not found")
        return license

    async def extend_license(
        self, key: str, new_expiration: datetime
    ) -> Tuple[License, License]:
        """
        Move a license's expiration forward.

        Args:
            key: License key
            new_expiration: Aware datetime strictly after the current expiration

        Returns:
            Tuple of (license before, license after)

        Raises:
            LicenseNotFoundError: If no license has this key
            LicenseAlreadyRevokedError: If the license is revoked
            InvalidExtensionError: If the expiration would not move forward
            InvalidLicenseInputError: If new_expiration is malformed
        """

        def mutation(license: License) -> License:
            try:
                return license.extend(new_expiration)
            except ValueError as e:
                raise InvalidLicenseInputError(str(e)) from e

        return await self.repository.update(key, mutation)

    async def revoke_license(self, key: str) -> Tuple[License, License]:
        """
        Revoke a license. Revoking twice is a no-op.

        Args:
            key: License key

        Returns:
            Tuple of (license before, license after); ``before.revoked``
            tells whether this call performed the revocation

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        return await self.repository.update(key, lambda license: license.revoke())
