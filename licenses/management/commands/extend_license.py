"""
Django management command to extend a license.
"""
from licenses.management.base import LicenseCommand, parse_timestamp


class Command(LicenseCommand):
    """Command to extend a license."""

    help = "Move a license's expiration date forward"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("key", help="License key")
        parser.add_argument("expires", help="New expiration timestamp (ISO 8601)")

    def handle(self, *args, **options):
        """Execute the command."""
        license = self.call(
            "extend_license", options["key"], parse_timestamp(options["expires"])
        )
        self.write_license(license)
        self.stderr.write(
            self.style.SUCCESS(
                f"License {license.key} extended to {license.expiration_date.isoformat()}"
            )
        )
