"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

from licenses.domain.license import License

LicenseMutation = Callable[[License], License]


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    Records are never deleted, so a key once added stays taken.
    """

    @abstractmethod
    async def add(self, license: License) -> License:
        """
        Insert a new license.

        The uniqueness check and the insert happen atomically.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key is already taken
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def update(
        self, key: str, mutation: LicenseMutation
    ) -> Tuple[License, License]:
        """
        Apply a read-modify-write to one license under exclusive access.

        ``mutation`` receives the current entity and returns the new one.
        If it raises, nothing is written and the exception propagates.
        Concurrent updates of the same key are serialized.

        Args:
            key: License key string
            mutation: Function computing the new entity

        Returns:
            Tuple of (entity before, entity after)

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """
        Count stored licenses.

        Returns:
            Number of licenses ever issued
        """
        pass
