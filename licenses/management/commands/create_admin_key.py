"""
Django management command to issue an admin API key.

The raw key is printed once and cannot be recovered afterwards.
"""
from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from licenses.infrastructure.models import AdminKey


class Command(BaseCommand):
    """Command to create an admin key."""

    help = "Create an admin key for the license admin API"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("owner", help="Who the key is issued to")
        parser.add_argument(
            "--expires-in-days",
            type=int,
            default=None,
            help="Days until the key expires (default: never)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        days = options["expires_in_days"]
        if days is not None and days < 1:
            raise CommandError("--expires-in-days must be at least 1")

        admin_key = AdminKey.objects.create(
            owner=options["owner"],
            expires_at=timezone.now() + timedelta(days=days) if days else None,
        )

        self.stdout.write(admin_key._raw_key)
        self.stderr.write(
            self.style.SUCCESS(
                f"Admin key {admin_key.key_prefix}... created for {admin_key.owner}"
            )
        )
