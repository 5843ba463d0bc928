"""
License, LicenseLog and AdminKey models.
"""
import hashlib
import secrets
import uuid

from django.db import models
from django.utils import timezone


def hash_admin_key(raw_key: str) -> str:
    """Return the SHA-256 hex digest stored for an admin key."""
    return hashlib.sha256(raw_key.encode()).hexdigest()


class License(models.Model):
    """
    An issued license.

    Rows are never deleted; the unique ``key`` therefore also guarantees
    that a key is never issued twice, revoked licenses included.
    Status is not stored: it is derived from ``revoked`` and
    ``expiration_date`` at read time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=128, unique=True, editable=False)
    expiration_date = models.DateTimeField(null=True, blank=True)
    extra_data = models.JSONField(
        null=True, blank=True, help_text="Opaque caller payload, stored verbatim"
    )
    revoked = models.BooleanField(default=False, db_index=True)
    revoked_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["expiration_date"], name="licenses_expirat_6c1f2e_idx"),
            models.Index(fields=["created_at"], name="licenses_created_4a9b0d_idx"),
        ]

    def __str__(self):
        return self.key

    @property
    def status(self) -> str:
        """
        Derived status at the current time.

        Returns:
            'revoked', 'expired' or 'active'
        """
        if self.revoked:
            return "revoked"
        if self.expiration_date and self.expiration_date <= timezone.now():
            return "expired"
        return "active"


class LicenseLog(models.Model):
    """
    Append-only audit trail of license lifecycle events.
    """

    KIND_CHOICES = [
        ("created", "Created"),
        ("extended", "Extended"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        License,
        to_field="key",
        db_column="license_key",
        on_delete=models.PROTECT,
        related_name="logs",
    )
    kind = models.CharField(max_length=20, choices=KIND_CHOICES)
    data = models.JSONField(default=dict, help_text="Details of the change")
    event_id = models.UUIDField(unique=True, help_text="Domain event that produced this row")
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_logs"
        ordering = ["timestamp"]
        indexes = [
            models.Index(fields=["license", "timestamp"], name="license_log_license_3e8c71_idx"),
            models.Index(fields=["kind"], name="license_log_kind_9d2f4a_idx"),
        ]

    def __str__(self):
        return f"{self.kind} - {self.license_id}"


class AdminKey(models.Model):
    """
    Credential for trusted callers of the admin API.

    Only the SHA-256 hash of the key is stored. The raw key is available
    once, as ``_raw_key``, right after the first save.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.CharField(max_length=255, help_text="Who this key was issued to")
    key_prefix = models.CharField(max_length=8, editable=False)
    key_hash = models.CharField(max_length=64, editable=False, unique=True)
    is_active = models.BooleanField(default=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "admin_keys"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.owner} - {self.key_prefix}..."

    def save(self, *args, **kwargs):
        """Generate the key on first save."""
        if not self.key_hash:
            raw_key = secrets.token_urlsafe(32)
            self.key_prefix = raw_key[:8]
            self.key_hash = hash_admin_key(raw_key)
            self._raw_key = raw_key
        super().save(*args, **kwargs)

    def verify_key(self, raw_key: str) -> bool:
        """
        Verify a raw admin key against the stored hash.

        Args:
            raw_key: The raw admin key to verify

        Returns:
            True if key matches, False otherwise
        """
        return secrets.compare_digest(self.key_hash, hash_admin_key(raw_key))

    def is_valid(self) -> bool:
        """
        Check if the key can currently be used.

        Returns:
            True if active and not expired
        """
        if not self.is_active:
            return False
        if self.expires_at and self.expires_at < timezone.now():
            return False
        return True

    def mark_used(self):
        """Record the time of last use."""
        self.last_used_at = timezone.now()
        self.save(update_fields=["last_used_at"])
