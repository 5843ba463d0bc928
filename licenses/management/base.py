"""
Shared plumbing for the license management commands.

The commands are a CLI transport over ``AdminClient``: they parse
arguments, call the client and print the resulting license as JSON.
"""
import json
from datetime import timezone as dt_timezone

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework.utils.encoders import JSONEncoder

from core.domain.exceptions import DomainException
from licenses.application.admin_client import build_admin_client
from licenses.application.dto.license_dto import LicenseDTO


def parse_timestamp(value: str):
    """
    Parse an ISO 8601 timestamp argument.

    Naive timestamps are read as UTC.

    Raises:
        CommandError: If the value is not a valid timestamp
    """
    try:
        parsed = parse_datetime(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise CommandError(f"Invalid timestamp: {value!r} (expected ISO 8601)")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


class LicenseCommand(BaseCommand):
    """Base class for commands that call the admin client."""

    def call(self, method: str, *args, **kwargs):
        """
        Run an admin client operation synchronously.

        Domain errors are reported as ``CommandError`` carrying the error code.
        """
        client = build_admin_client()
        try:
            return async_to_sync(getattr(client, method))(*args, **kwargs)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

    def write_license(self, license: LicenseDTO):
        """Print a license as JSON."""
        self.stdout.write(json.dumps(license.__dict__, cls=JSONEncoder, indent=2))
