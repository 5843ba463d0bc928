"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
Read-modify-write runs in a transaction on a row locked with
``select_for_update``.
"""
import copy
from typing import Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from core.metrics import license_key_collisions_total
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseMutation, LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Enforces key uniqueness through the database constraint
    3. Serializes updates per key with row locks
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            expiration_date=model.expiration_date,
            extra_data=copy.deepcopy(model.extra_data),
            revoked=model.revoked,
            revoked_at=model.revoked_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: LicenseModel, license: License) -> LicenseModel:
        """Copy the mutable fields of an entity onto its model."""
        model.expiration_date = license.expiration_date
        model.revoked = license.revoked
        model.revoked_at = license.revoked_at
        return model

    @sync_to_async
    def add(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity

        Raises:
            DuplicateLicenseKeyError: If the key is already taken
        """
        try:
            with transaction.atomic():
                model = LicenseModel.objects.create(
                    key=license.key,
                    expiration_date=license.expiration_date,
                    extra_data=copy.deepcopy(license.extra_data),
                    revoked=license.revoked,
                    revoked_at=license.revoked_at,
                )
        except IntegrityError as e:
            if LicenseModel.objects.filter(key=license.key).exists():
                license_key_collisions_total.inc()
                raise DuplicateLicenseKeyError(license.key) from e
            raise
        return self._to_domain(model)

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(key=key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def update(self, key: str, mutation: LicenseMutation) -> Tuple[License, License]:
        """
        Apply a mutation to one license inside a locking transaction.

        Args:
            key: License key string
            mutation: Function computing the new entity

        Returns:
            Tuple of (entity before, entity after)

        Raises:
            LicenseNotFoundError: If no license has this key
        """
        with transaction.atomic():
            try:
                model = LicenseModel.objects.select_for_update().get(key=key)
            except LicenseModel.DoesNotExist:
                raise LicenseNotFoundError(f"License {key} not found")

            before = self._to_domain(model)
            after = mutation(before)
            if after is before:
                return before, before

            self._apply(model, after)
            model.save(update_fields=["expiration_date", "revoked", "revoked_at", "updated_at"])
            return before, self._to_domain(model)

    @sync_to_async
    def count(self) -> int:
        """
        Count stored licenses.

        Returns:
            Number of licenses ever issued
        """
        return LicenseModel.objects.count()
