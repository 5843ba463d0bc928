"""
Django management command to revoke a license.
"""
from licenses.management.base import LicenseCommand


class Command(LicenseCommand):
    """Command to revoke a license."""

    help = "Permanently revoke a license (no-op if already revoked)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("key", help="License key")

    def handle(self, *args, **options):
        """Execute the command."""
        self.call("revoke_license", options["key"])
        self.stdout.write(self.style.SUCCESS(f"License {options['key']} revoked"))
