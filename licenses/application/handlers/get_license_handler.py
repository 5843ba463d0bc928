"""
GetLicenseHandler.

Handler for the get license query.
"""
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.domain.services import LicenseRegistry


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, registry: LicenseRegistry):
        """Initialize handler with the registry."""
        self.registry = registry

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        """
        Handle get license query.

        Args:
            query: GetLicenseQuery

        Returns:
            LicenseDTO with status derived at the current time

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.registry.get_license(query.key)
        return LicenseDTO.from_entity(license)
