"""
Integration tests for the license management commands.
"""
import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from licenses.infrastructure.models import AdminKey, License, hash_admin_key


def run(name, *args, **options):
    out, err = StringIO(), StringIO()
    call_command(name, *args, stdout=out, stderr=err, **options)
    return out.getvalue(), err.getvalue()


def create(*args):
    out, _ = run("create_license", *args)
    return json.loads(out)


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseCommands:
    """Integration tests for create/extend/revoke/show_license."""

    def test_create_license(self):
        """Test issuing a license from the command line."""
        out, err = run(
            "create_license",
            "--expires",
            "2030-01-01T00:00:00",
            "--extra-data",
            '{"holder": "ACME"}',
        )

        data = json.loads(out)
        assert data["status"] == "active"
        assert data["extra_data"] == {"holder": "ACME"}
        assert data["expiration_date"].startswith("2030-01-01T00:00:00")
        assert data["key"] in err
        assert License.objects.filter(key=data["key"]).exists()

    def test_create_license_rejects_bad_arguments(self):
        """Test malformed timestamps and payloads are refused."""
        with pytest.raises(CommandError, match="Invalid timestamp"):
            run("create_license", "--expires", "tomorrow")
        with pytest.raises(CommandError, match="not valid JSON"):
            run("create_license", "--extra-data", "{nope")
        assert License.objects.count() == 0

    def test_out_of_range_expiration(self):
        """Test expirations that overflow in UTC are reported as invalid input."""
        with pytest.raises(CommandError, match="INVALID_INPUT"):
            run("create_license", "--expires", "9999-12-31T23:00:00-05:00")

        key = create("--expires", "2030-01-01T00:00:00Z")["key"]
        with pytest.raises(CommandError, match="INVALID_INPUT"):
            run("extend_license", key, "0001-01-01T00:00:00+05:00")
        assert License.objects.count() == 1

    def test_extend_license(self):
        """Test extending a license from the command line."""
        key = create("--expires", "2030-01-01T00:00:00Z")["key"]

        out, _ = run("extend_license", key, "2031-01-01T00:00:00Z")

        assert json.loads(out)["expiration_date"].startswith("2031-01-01")

    def test_extend_license_backwards(self):
        """Test domain errors are reported with their code."""
        key = create("--expires", "2030-01-01T00:00:00Z")["key"]

        with pytest.raises(CommandError, match="INVALID_EXTENSION"):
            run("extend_license", key, "2029-01-01T00:00:00Z")

    def test_revoke_license(self):
        """Test revoking a license twice from the command line."""
        key = create()["key"]

        out, _ = run("revoke_license", key)
        run("revoke_license", key)

        assert f"License {key} revoked" in out
        assert License.objects.get(key=key).revoked is True

    def test_show_license(self):
        """Test printing a license."""
        key = create("--expires", "2000-01-01T00:00:00Z")["key"]

        out, _ = run("show_license", key)

        assert json.loads(out)["status"] == "expired"

    def test_show_unknown_license(self):
        """Test an unknown key is reported as not found."""
        with pytest.raises(CommandError, match="LICENSE_NOT_FOUND"):
            run("show_license", "LA-NOPE")


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateAdminKeyCommand:
    """Integration tests for create_admin_key."""

    def test_create_admin_key(self):
        """Test the printed key authenticates against the stored hash."""
        out, err = run("create_admin_key", "ops@example.com", "--expires-in-days", "7")

        raw_key = out.strip()
        admin_key = AdminKey.objects.get(key_hash=hash_admin_key(raw_key))
        assert admin_key.owner == "ops@example.com"
        assert admin_key.expires_at is not None
        assert admin_key.is_valid()
        assert "ops@example.com" in err

    def test_create_admin_key_invalid_expiry(self):
        """Test a non-positive lifetime is refused."""
        with pytest.raises(CommandError):
            run("create_admin_key", "ops@example.com", "--expires-in-days", "0")
