"""
License lifecycle handlers.

Handlers for extend and revoke license commands.
"""
import logging

from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseExtended, LicenseRevoked
from licenses.domain.services import LicenseRegistry

logger = logging.getLogger(__name__)


class ExtendLicenseHandler:
    """Handler for ExtendLicenseCommand."""

    def __init__(self, registry: LicenseRegistry, event_bus: EventBus = None):
        """Initialize handler with the registry and event bus."""
        self.registry = registry
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: ExtendLicenseCommand) -> LicenseDTO:
        """
        Handle extend license command.

        Args:
            command: ExtendLicenseCommand

        Returns:
            LicenseDTO with the new expiration

        Raises:
            LicenseNotFoundError: If license not found
            LicenseAlreadyRevokedError: If license is revoked
            InvalidExtensionError: If the expiration would not move forward
        """
        before, after = await self.registry.extend_license(
            command.key, command.expiration_date
        )

        logger.info(
            "License extended",
            extra={
                "license_key": after.key,
                "previous_expiration": before.expiration_date.isoformat(),
                "new_expiration": after.expiration_date.isoformat(),
            },
        )

        await self.event_bus.publish(
            LicenseExtended(
                key=after.key,
                previous_expiration=before.expiration_date,
                new_expiration=after.expiration_date,
            )
        )

        return LicenseDTO.from_entity(after)


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, registry: LicenseRegistry, event_bus: EventBus = None):
        """Initialize handler with the registry and event bus."""
        self.registry = registry
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: RevokeLicenseCommand) -> LicenseDTO:
        """
        Handle revoke license command.

        Revoking an already revoked license succeeds without publishing
        another event.

        Args:
            command: RevokeLicenseCommand

        Returns:
            LicenseDTO of the revoked license

        Raises:
            LicenseNotFoundError: If license not found
        """
        before, after = await self.registry.revoke_license(command.key)

        if before.revoked:
            logger.debug("License already revoked", extra={"license_key": after.key})
            return LicenseDTO.from_entity(after)

        logger.info(
            "License revoked",
            extra={"license_key": after.key, "revoked_at": after.revoked_at.isoformat()},
        )

        await self.event_bus.publish(LicenseRevoked(key=after.key, revoked_at=after.revoked_at))

        return LicenseDTO.from_entity(after)
