"""
In-memory implementation of LicenseRepository port.

Used by tests and by callers that embed the registry without a database.
A single lock serializes every operation, which makes key assignment and
read-modify-write atomic across threads.
"""
import copy
import threading
from typing import Dict, Optional, Tuple

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseMutation, LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """Dictionary-backed repository. Returned entities never share payloads with the store."""

    def __init__(self):
        self._licenses: Dict[str, License] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _copy(license: License) -> License:
        return copy.deepcopy(license)

    async def add(self, license: License) -> License:
        with self._lock:
            if license.key in self._licenses:
                raise DuplicateLicenseKeyError(license.key)
            self._licenses[license.key] = self._copy(license)
            return self._copy(license)

    async def find_by_key(self, key: str) -> Optional[License]:
        with self._lock:
            license = self._licenses.get(key)
            return self._copy(license) if license else None

    async def update(self, key: str, mutation: LicenseMutation) -> Tuple[License, License]:
        with self._lock:
            current = self._licenses.get(key)
            if current is None:
                raise LicenseNotFoundError(f"License {key} not found")

            before = self._copy(current)
            after = mutation(self._copy(current))
            if after.key != key:
                raise ValueError("A mutation cannot change the license key")
            self._licenses[key] = self._copy(after)
            return before, self._copy(after)

    async def count(self) -> int:
        with self._lock:
            return len(self._licenses)
