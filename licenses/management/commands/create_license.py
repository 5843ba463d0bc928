"""
Django management command to issue a license.
"""
import json

from django.core.management.base import CommandError

from licenses.management.base import LicenseCommand, parse_timestamp


class Command(LicenseCommand):
    """Command to create a license."""

    help = "Issue a new license and print it as JSON"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--expires",
            help="Expiration timestamp (ISO 8601, naive values are UTC). Omit for no expiry.",
        )
        parser.add_argument(
            "--extra-data",
            help="Opaque JSON payload stored with the license",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        expiration_date = parse_timestamp(options["expires"]) if options["expires"] else None

        extra_data = None
        if options["extra_data"] is not None:
            try:
                extra_data = json.loads(options["extra_data"])
            except json.JSONDecodeError as e:
                raise CommandError(f"--extra-data is not valid JSON: {e}") from e

        license = self.call(
            "create_license", expiration_date=expiration_date, extra_data=extra_data
        )
        self.write_license(license)
        self.stderr.write(self.style.SUCCESS(f"License {license.key} created"))
