"""
Unit tests for LicenseRegistry.
"""

import asyncio
import threading
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    InvalidExtensionError,
    InvalidLicenseInputError,
    LicenseAlreadyRevokedError,
    LicenseKeyGenerationError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.domain.services import LicenseRegistry


class TestCreateLicense:
    """Tests for LicenseRegistry.create_license."""

    @pytest.mark.asyncio
    async def test_create_license(self, license_registry, in_memory_repository, future):
        """Test creating a license stores it under a new key."""
        license = await license_registry.create_license(
            expiration_date=future, extra_data={"holder": "ACME"}
        )

        assert license.key.startswith("LA-")
        assert license.status() == LicenseStatus.ACTIVE
        stored = await in_memory_repository.find_by_key(license.key)
        assert stored == license

    @pytest.mark.asyncio
    async def test_create_license_with_past_expiration(self, license_registry, past):
        """Test a license can be created already expired."""
        license = await license_registry.create_license(expiration_date=past)

        assert license.status() == LicenseStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_extra_data_is_stored_verbatim(self, license_registry):
        """Test the payload comes back unchanged and is not shared with the caller."""
        payload = {"nested": {"list": [1, "two", None]}, "flag": True}

        license = await license_registry.create_license(extra_data=payload)
        payload["nested"]["list"].append("mutated")
        fetched = await license_registry.get_license(license.key)

        assert fetched.extra_data == {"nested": {"list": [1, "two", None]}, "flag": True}

    @pytest.mark.asyncio
    async def test_keys_are_unique(self, license_registry):
        """Test many creations yield distinct keys."""
        licenses = [await license_registry.create_license() for _ in range(200)]

        assert len({license.key for license in licenses}) == 200

    @pytest.mark.asyncio
    async def test_collision_is_retried(self, in_memory_repository, sequence_key_generator):
        """Test a colliding key is silently replaced with a fresh one."""
        generator = sequence_key_generator(["LA-DUP", "LA-DUP", "LA-NEW"])
        registry = LicenseRegistry(in_memory_repository, key_generator=generator)

        first = await registry.create_license()
        second = await registry.create_license()

        assert first.key == "LA-DUP"
        assert second.key == "LA-NEW"
        assert generator.calls == 3

    @pytest.mark.asyncio
    async def test_revoked_key_is_never_reissued(
        self, in_memory_repository, sequence_key_generator
    ):
        """Test a revoked license keeps its key reserved."""
        generator = sequence_key_generator(["LA-ONE", "LA-ONE", "LA-TWO"])
        registry = LicenseRegistry(in_memory_repository, key_generator=generator)

        first = await registry.create_license()
        await registry.revoke_license(first.key)
        second = await registry.create_license()

        assert second.key == "LA-TWO"

    @pytest.mark.asyncio
    async def test_collision_attempts_exhausted(
        self, in_memory_repository, sequence_key_generator
    ):
        """Test a generator that only collides eventually gives up."""
        generator = sequence_key_generator(["LA-SAME"] * 4)
        registry = LicenseRegistry(in_memory_repository, key_generator=generator, max_key_attempts=3)
        await registry.create_license()

        with pytest.raises(LicenseKeyGenerationError):
            await registry.create_license()
        assert await in_memory_repository.count() == 1

    @pytest.mark.asyncio
    async def test_create_license_invalid_expiration(self, license_registry):
        """Test structural problems surface as invalid input."""
        with pytest.raises(InvalidLicenseInputError):
            await license_registry.create_license(expiration_date="2030-01-01")

    def test_max_key_attempts_must_be_positive(self, in_memory_repository):
        """Test the registry refuses a zero attempt budget."""
        with pytest.raises(ValueError):
            LicenseRegistry(in_memory_repository, max_key_attempts=0)


class TestExtendLicense:
    """Tests for LicenseRegistry.extend_license."""

    @pytest.mark.asyncio
    async def test_extend_license(self, license_registry, future):
        """Test extending moves the expiration forward."""
        license = await license_registry.create_license(expiration_date=future)
        later = future + timedelta(days=365)

        before, after = await license_registry.extend_license(license.key, later)

        assert before.expiration_date == future
        assert after.expiration_date == later
        assert (await license_registry.get_license(license.key)).expiration_date == later

    @pytest.mark.asyncio
    async def test_extend_unknown_key(self, license_registry, future):
        """Test extending an unknown key fails with not found."""
        with pytest.raises(LicenseNotFoundError):
            await license_registry.extend_license("LA-MISSING", future)

    @pytest.mark.asyncio
    async def test_extend_not_later_leaves_license_unchanged(self, license_registry, future):
        """Test a rejected extension writes nothing."""
        license = await license_registry.create_license(expiration_date=future)

        with pytest.raises(InvalidExtensionError):
            await license_registry.extend_license(license.key, future - timedelta(days=1))

        assert (await license_registry.get_license(license.key)).expiration_date == future

    @pytest.mark.asyncio
    async def test_extend_revoked_license(self, license_registry, future):
        """Test a revoked license cannot be extended."""
        license = await license_registry.create_license(expiration_date=future)
        await license_registry.revoke_license(license.key)

        with pytest.raises(LicenseAlreadyRevokedError):
            await license_registry.extend_license(license.key, future + timedelta(days=1))

        stored = await license_registry.get_license(license.key)
        assert stored.expiration_date == future
        assert stored.status() == LicenseStatus.REVOKED

    @pytest.mark.asyncio
    async def test_revoked_reported_before_invalid_extension(self, license_registry, future):
        """Test a revoked license that never expires reports revocation."""
        license = await license_registry.create_license()
        await license_registry.revoke_license(license.key)

        with pytest.raises(LicenseAlreadyRevokedError):
            await license_registry.extend_license(license.key, future)


class TestRevokeLicense:
    """Tests for LicenseRegistry.revoke_license."""

    @pytest.mark.asyncio
    async def test_revoke_license(self, license_registry, future):
        """Test revoking marks the license revoked."""
        license = await license_registry.create_license(expiration_date=future)

        before, after = await license_registry.revoke_license(license.key)

        assert before.revoked is False
        assert after.revoked is True
        assert (await license_registry.get_license(license.key)).status() == LicenseStatus.REVOKED

    @pytest.mark.asyncio
    async def test_revoke_twice_is_noop(self, license_registry):
        """Test a second revoke succeeds and keeps the first timestamp."""
        license = await license_registry.create_license()
        _, first = await license_registry.revoke_license(license.key)

        before, second = await license_registry.revoke_license(license.key)

        assert before.revoked is True
        assert second.revoked_at == first.revoked_at

    @pytest.mark.asyncio
    async def test_revoke_unknown_key(self, license_registry):
        """Test revoking an unknown key fails with not found."""
        with pytest.raises(LicenseNotFoundError):
            await license_registry.revoke_license("LA-MISSING")


def utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


class TestLifecycleScenario:
    """The documented create/extend/revoke walkthrough with fixed dates."""

    @pytest.mark.asyncio
    async def test_documented_lifecycle(self, license_registry):
        """Test create, extend, backward extend, revoke and unknown revoke in sequence."""
        license = await license_registry.create_license(
            expiration_date=utc(2025, 1, 1), extra_data=None
        )
        assert license.expiration_date == utc(2025, 1, 1)
        assert license.extra_data is None
        assert license.status() == LicenseStatus.EXPIRED

        _, extended = await license_registry.extend_license(license.key, utc(2025, 6, 1))
        assert extended.expiration_date == utc(2025, 6, 1)

        with pytest.raises(InvalidExtensionError):
            await license_registry.extend_license(license.key, utc(2025, 2, 1))
        stored = await license_registry.get_license(license.key)
        assert stored.expiration_date == utc(2025, 6, 1)

        await license_registry.revoke_license(license.key)
        with pytest.raises(LicenseAlreadyRevokedError):
            await license_registry.extend_license(license.key, utc(2099, 1, 1))

        with pytest.raises(LicenseNotFoundError):
            await license_registry.revoke_license("LA-NEVER-ISSUED")

    @pytest.mark.asyncio
    async def test_expired_license_extended_into_future(self, license_registry):
        """Test an expired license becomes active again once extended past now."""
        license = await license_registry.create_license(expiration_date=utc(2025, 1, 1))

        _, extended = await license_registry.extend_license(license.key, utc(2099, 1, 1))

        assert extended.status() == LicenseStatus.ACTIVE


class TestConcurrency:
    """Tests for concurrent access through the in-memory store."""

    def _run_threads(self, targets):
        threads = [threading.Thread(target=target) for target in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_concurrent_creates_get_unique_keys(self, license_registry):
        """Test parallel creations never share a key."""
        keys = []
        lock = threading.Lock()

        def create():
            for _ in range(25):
                license = asyncio.run(license_registry.create_license())
                with lock:
                    keys.append(license.key)

        self._run_threads([create] * 8)

        assert len(keys) == 200
        assert len(set(keys)) == 200

    def test_concurrent_extend_and_revoke(self, license_registry, future):
        """Test extensions racing a revoke leave a consistent record."""
        license = asyncio.run(license_registry.create_license(expiration_date=future))
        outcomes = []
        lock = threading.Lock()

        def extend(days):
            def run():
                new_expiration = future + timedelta(days=days)
                try:
                    _, after = asyncio.run(
                        license_registry.extend_license(license.key, new_expiration)
                    )
                    result = ("extended", after.expiration_date)
                except (LicenseAlreadyRevokedError, InvalidExtensionError) as e:
                    result = (type(e).__name__, new_expiration)
                with lock:
                    outcomes.append(result)

            return run

        def revoke():
            asyncio.run(license_registry.revoke_license(license.key))

        self._run_threads([extend(days) for days in range(1, 21)] + [revoke])

        final = asyncio.run(license_registry.get_license(license.key))
        extended = [date for outcome, date in outcomes if outcome == "extended"]

        assert final.status() == LicenseStatus.REVOKED
        assert len(outcomes) == 20
        if extended:
            assert final.expiration_date == max(extended)
        else:
            assert final.expiration_date == future
