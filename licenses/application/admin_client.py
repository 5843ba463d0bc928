"""
Admin interface.

``AdminClient`` is the operation surface trusted callers use to issue,
extend, revoke and look up licenses. Transports (HTTP views, management
commands) are thin adapters over it.

Arguments are shape-checked here before anything reaches the registry;
failures surface only as the taxonomy in ``core.domain.exceptions``.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from django.conf import settings

from core.domain.events import EventBus
from core.domain.exceptions import InvalidLicenseInputError
from core.domain.value_objects import LicenseKeyValue, OpaquePayload, Timestamp
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.application.handlers.get_license_handler import GetLicenseHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    ExtendLicenseHandler,
    RevokeLicenseHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.domain.services import LicenseKeyGenerator, LicenseRegistry
from licenses.ports.license_repository import LicenseRepository


class AdminClient(ABC):
    """Administrative operations on licenses."""

    @abstractmethod
    async def create_license(
        self,
        expiration_date: Optional[datetime] = None,
        extra_data: Any = None,
    ) -> LicenseDTO:
        """
        Issue a new license.

        Args:
            expiration_date: Optional aware expiration; None means never expires
            extra_data: Optional JSON-serializable payload, stored verbatim

        Returns:
            The stored license, including its freshly assigned key

        Raises:
            InvalidLicenseInputError: On malformed arguments
        """
        pass

    @abstractmethod
    async def extend_license(self, key: str, expiration_date: datetime) -> LicenseDTO:
        """
        Move a license's expiration forward.

        Raises:
            InvalidLicenseInputError: On malformed arguments
            LicenseNotFoundError: If the key was never issued
            LicenseAlreadyRevokedError: If the license is revoked
            InvalidExtensionError: If the new expiration is not later than
                the current one, or the license never expires
        """
        pass

    @abstractmethod
    async def revoke_license(self, key: str) -> None:
        """
        Revoke a license. Revoking an already revoked license succeeds.

        Raises:
            InvalidLicenseInputError: On a malformed key
            LicenseNotFoundError: If the key was never issued
        """
        pass

    @abstractmethod
    async def get_license(self, key: str) -> LicenseDTO:
        """
        Look up a license and its current status.

        Raises:
            InvalidLicenseInputError: On a malformed key
            LicenseNotFoundError: If the key was never issued
        """
        pass


def _validate_key(key: Any) -> str:
    try:
        return LicenseKeyValue(key).value
    except ValueError as e:
        raise InvalidLicenseInputError(str(e)) from e


def _validate_timestamp(value: Any, field: str) -> datetime:
    try:
        return Timestamp(value).value
    except ValueError as e:
        raise InvalidLicenseInputError(f"{field}: {e}") from e


def _validate_payload(value: Any) -> Any:
    try:
        return OpaquePayload(value).value
    except ValueError as e:
        raise InvalidLicenseInputError(str(e)) from e


class LocalAdminClient(AdminClient):
    """AdminClient running the command handlers in-process."""

    def __init__(self, registry: LicenseRegistry, event_bus: EventBus = None):
        """
        Initialize client.

        Args:
            registry: License registry to delegate to
            event_bus: Bus for lifecycle events (defaults to the global bus)
        """
        self.registry = registry
        self._create = CreateLicenseHandler(registry, event_bus)
        self._extend = ExtendLicenseHandler(registry, event_bus)
        self._revoke = RevokeLicenseHandler(registry, event_bus)
        self._get = GetLicenseHandler(registry)

    async def create_license(
        self,
        expiration_date: Optional[datetime] = None,
        extra_data: Any = None,
    ) -> LicenseDTO:
        if expiration_date is not None:
            expiration_date = _validate_timestamp(expiration_date, "expiration_date")
        extra_data = _validate_payload(extra_data)

        return await self._create.handle(
            CreateLicenseCommand(expiration_date=expiration_date, extra_data=extra_data)
        )

    async def extend_license(self, key: str, expiration_date: datetime) -> LicenseDTO:
        key = _validate_key(key)
        expiration_date = _validate_timestamp(expiration_date, "expiration_date")

        return await self._extend.handle(
            ExtendLicenseCommand(key=key, expiration_date=expiration_date)
        )

    async def revoke_license(self, key: str) -> None:
        key = _validate_key(key)
        await self._revoke.handle(RevokeLicenseCommand(key=key))

    async def get_license(self, key: str) -> LicenseDTO:
        key = _validate_key(key)
        return await self._get.handle(GetLicenseQuery(key=key))


def build_registry(repository: LicenseRepository = None) -> LicenseRegistry:
    """
    Build a registry configured from Django settings.

    Args:
        repository: License store (defaults to the Django ORM repository)

    Returns:
        LicenseRegistry
    """
    if repository is None:
        from licenses.infrastructure.repositories.django_license_repository import (
            DjangoLicenseRepository,
        )

        repository = DjangoLicenseRepository()

    return LicenseRegistry(
        repository=repository,
        key_generator=LicenseKeyGenerator(settings.LICENSE_KEY_PREFIX),
        max_key_attempts=settings.LICENSE_KEY_MAX_ATTEMPTS,
    )


def build_admin_client(
    repository: LicenseRepository = None, event_bus: EventBus = None
) -> LocalAdminClient:
    """Build a LocalAdminClient wired from Django settings."""
    return LocalAdminClient(build_registry(repository), event_bus)
