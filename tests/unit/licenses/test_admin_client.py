"""
Unit tests for the admin interface.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    InvalidExtensionError,
    InvalidLicenseInputError,
    LicenseAlreadyRevokedError,
    LicenseNotFoundError,
)
from licenses.application.admin_client import AdminClient, LocalAdminClient
from licenses.domain.events import LicenseCreated, LicenseExtended, LicenseRevoked


class RecordingHandler:
    """Event handler that records what it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def recorder(event_bus):
    handler = RecordingHandler()
    for event_type in (LicenseCreated, LicenseExtended, LicenseRevoked):
        event_bus.subscribe(event_type, handler)
    return handler


class TestArgumentValidation:
    """Tests for argument shape validation."""

    def test_local_client_implements_contract(self, admin_client):
        """Test LocalAdminClient is an AdminClient."""
        assert isinstance(admin_client, AdminClient)

    @pytest.mark.asyncio
    async def test_create_with_naive_expiration(self, admin_client):
        """Test naive datetimes are rejected."""
        with pytest.raises(InvalidLicenseInputError, match="timezone-aware"):
            await admin_client.create_license(expiration_date=datetime(2030, 1, 1))

    @pytest.mark.asyncio
    async def test_create_with_non_datetime_expiration(self, admin_client):
        """Test non-datetime expirations are rejected."""
        with pytest.raises(InvalidLicenseInputError):
            await admin_client.create_license(expiration_date="tomorrow")

    @pytest.mark.asyncio
    async def test_create_with_unserializable_extra_data(self, admin_client):
        """Test extra_data must be storable as JSON."""
        with pytest.raises(InvalidLicenseInputError, match="JSON"):
            await admin_client.create_license(extra_data={"handle": object()})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", "   ", None, 42, "LA KEY", "X" * 129])
    async def test_malformed_key_on_extend(self, admin_client, future, key):
        """Test malformed keys are invalid input, not not-found."""
        with pytest.raises(InvalidLicenseInputError):
            await admin_client.extend_license(key, future)

    @pytest.mark.asyncio
    async def test_malformed_key_on_revoke(self, admin_client):
        """Test an empty key on revoke is invalid input."""
        with pytest.raises(InvalidLicenseInputError):
            await admin_client.revoke_license("")

    @pytest.mark.asyncio
    async def test_extend_with_naive_expiration(self, admin_client, future):
        """Test naive datetimes are rejected on extend before lookup."""
        with pytest.raises(InvalidLicenseInputError):
            await admin_client.extend_license("LA-MISSING", datetime(2030, 1, 1))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value",
        [
            datetime(9999, 12, 31, 23, tzinfo=timezone(timedelta(hours=-5))),
            datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=5))),
        ],
    )
    async def test_out_of_range_expiration(self, admin_client, future, value):
        """Test expirations outside the UTC year range are invalid input on create and extend."""
        with pytest.raises(InvalidLicenseInputError, match="out of range"):
            await admin_client.create_license(expiration_date=value)

        created = await admin_client.create_license(expiration_date=future)
        with pytest.raises(InvalidLicenseInputError, match="out of range"):
            await admin_client.extend_license(created.key, value)
        assert (await admin_client.get_license(created.key)).expiration_date == future


class TestScenarios:
    """End-to-end lifecycle scenarios through the admin interface."""

    @pytest.mark.asyncio
    async def test_create_then_extend(self, admin_client):
        """Test scenario: create with expiration then extend it."""
        start = datetime.fromisoformat("2030-01-01T00:00:00+00:00")
        created = await admin_client.create_license(
            expiration_date=start, extra_data={"holder": "ACME"}
        )

        extended = await admin_client.extend_license(created.key, start + timedelta(days=365))

        fetched = await admin_client.get_license(created.key)
        assert extended.expiration_date == datetime.fromisoformat("2031-01-01T00:00:00+00:00")
        assert fetched.expiration_date == extended.expiration_date
        assert fetched.extra_data == {"holder": "ACME"}
        assert fetched.status == "active"

    @pytest.mark.asyncio
    async def test_revoke_blocks_extension(self, admin_client, future):
        """Test scenario: revoke then extend fails and leaves the record alone."""
        created = await admin_client.create_license(expiration_date=future)
        await admin_client.revoke_license(created.key)

        with pytest.raises(LicenseAlreadyRevokedError):
            await admin_client.extend_license(created.key, future + timedelta(days=30))

        fetched = await admin_client.get_license(created.key)
        assert fetched.status == "revoked"
        assert fetched.expiration_date == future

    @pytest.mark.asyncio
    async def test_idempotent_revoke(self, admin_client):
        """Test scenario: revoking twice succeeds both times."""
        created = await admin_client.create_license()

        assert await admin_client.revoke_license(created.key) is None
        assert await admin_client.revoke_license(created.key) is None
        assert (await admin_client.get_license(created.key)).status == "revoked"

    @pytest.mark.asyncio
    async def test_backward_extension_rejected(self, admin_client, future):
        """Test scenario: moving expiration backward fails."""
        created = await admin_client.create_license(expiration_date=future)

        with pytest.raises(InvalidExtensionError):
            await admin_client.extend_license(created.key, future - timedelta(days=1))

        assert (await admin_client.get_license(created.key)).expiration_date == future

    @pytest.mark.asyncio
    async def test_unknown_key(self, admin_client, future):
        """Test scenario: operations on an unknown key fail with not found."""
        with pytest.raises(LicenseNotFoundError):
            await admin_client.extend_license("LA-NEVER-ISSUED", future)
        with pytest.raises(LicenseNotFoundError):
            await admin_client.revoke_license("LA-NEVER-ISSUED")
        with pytest.raises(LicenseNotFoundError):
            await admin_client.get_license("LA-NEVER-ISSUED")


class TestLifecycleEvents:
    """Tests for events published by the command handlers."""

    @pytest.mark.asyncio
    async def test_events_for_full_lifecycle(self, admin_client, recorder, future):
        """Test create, extend and revoke each publish one event."""
        created = await admin_client.create_license(expiration_date=future)
        await admin_client.extend_license(created.key, future + timedelta(days=1))
        await admin_client.revoke_license(created.key)

        assert [type(e) for e in recorder.events] == [
            LicenseCreated,
            LicenseExtended,
            LicenseRevoked,
        ]
        assert all(e.aggregate_id == created.key for e in recorder.events)
        extended = recorder.events[1]
        assert extended.previous_expiration == future
        assert extended.to_dict()["data"]["new_expiration"] == (
            future + timedelta(days=1)
        ).isoformat()

    @pytest.mark.asyncio
    async def test_repeat_revoke_publishes_once(self, admin_client, recorder):
        """Test only the first revocation is announced."""
        created = await admin_client.create_license()
        await admin_client.revoke_license(created.key)
        await admin_client.revoke_license(created.key)

        revoked = [e for e in recorder.events if isinstance(e, LicenseRevoked)]
        assert len(revoked) == 1

    @pytest.mark.asyncio
    async def test_failed_operation_publishes_nothing(self, admin_client, recorder, future):
        """Test rejected operations raise no events."""
        created = await admin_client.create_license(expiration_date=future)
        recorder.events.clear()

        with pytest.raises(InvalidExtensionError):
            await admin_client.extend_license(created.key, future)

        assert recorder.events == []
