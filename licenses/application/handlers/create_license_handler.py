"""
CreateLicenseHandler.

Handles the create license command.
"""
import logging

from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseCreated
from licenses.domain.services import LicenseRegistry

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, registry: LicenseRegistry, event_bus: EventBus = None):
        """Initialize handler with the registry and event bus."""
        self.registry = registry
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            LicenseDTO for the issued license

        Raises:
            InvalidLicenseInputError: If the license is structurally invalid
        """
        license = await self.registry.create_license(
            expiration_date=command.expiration_date,
            extra_data=command.extra_data,
        )

        logger.info(
            "License created",
            extra={
                "license_key": license.key,
                "expiration_date": (
                    license.expiration_date.isoformat() if license.expiration_date else None
                ),
            },
        )

        await self.event_bus.publish(
            LicenseCreated(key=license.key, expiration_date=license.expiration_date)
        )

        return LicenseDTO.from_entity(license)
