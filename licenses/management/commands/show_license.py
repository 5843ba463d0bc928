"""
Django management command to display a license.
"""
from licenses.management.base import LicenseCommand


class Command(LicenseCommand):
    """Command to show a license."""

    help = "Print a license and its current status as JSON"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("key", help="License key")

    def handle(self, *args, **options):
        """Execute the command."""
        self.write_license(self.call("get_license", options["key"]))
