"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from core.infrastructure.events import InMemoryEventBus
from licenses.application.admin_client import LocalAdminClient
from licenses.domain.license import License
from licenses.domain.services import LicenseRegistry
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryLicenseRepository,
)


class SequenceKeyGenerator:
    """Key generator that replays a fixed list of keys."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.calls = 0

    def __call__(self):
        key = self.keys[self.calls]
        self.calls += 1
        return key


def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def future():
    """An expiration thirty days from now."""
    return now() + timedelta(days=30)


@pytest.fixture
def past():
    """An expiration one day ago."""
    return now() - timedelta(days=1)


@pytest.fixture
def event_bus():
    """Fixture for an isolated event bus with no subscribers."""
    return InMemoryEventBus()


@pytest.fixture
def in_memory_repository():
    """Fixture for InMemoryLicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def license_repository():
    """Fixture for DjangoLicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def license_registry(in_memory_repository):
    """Fixture for a LicenseRegistry over the in-memory store."""
    return LicenseRegistry(in_memory_repository)


@pytest.fixture
def admin_client(license_registry, event_bus):
    """Fixture for a LocalAdminClient over the in-memory store."""
    return LocalAdminClient(license_registry, event_bus)


@pytest.fixture
def sample_license(future):
    """Fixture for a sample License entity."""
    return License.create(
        key="LA-TEST-0000-0000-0000-0000-0000-0000-0001",
        expiration_date=future,
        extra_data={"holder": "ACME Corp", "seats": 5},
    )


@pytest.fixture
def sequence_key_generator():
    """Factory fixture for SequenceKeyGenerator."""
    return SequenceKeyGenerator


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    return APIClient()


@pytest.fixture
def admin_key(db):
    """Fixture for a stored AdminKey; the raw key is on ``_raw_key``."""
    from licenses.infrastructure.models import AdminKey

    return AdminKey.objects.create(owner="ops@example.com")


@pytest.fixture
def admin_api_client(api_client, admin_key):
    """API client authenticated with a valid admin key."""
    api_client.credentials(HTTP_X_ADMIN_KEY=admin_key._raw_key)
    return api_client
