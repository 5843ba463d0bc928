import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(editable=False, max_length=128, unique=True)),
                ("expiration_date", models.DateTimeField(blank=True, null=True)),
                (
                    "extra_data",
                    models.JSONField(
                        blank=True, help_text="Opaque caller payload, stored verbatim", null=True
                    ),
                ),
                ("revoked", models.BooleanField(db_index=True, default=False)),
                ("revoked_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["expiration_date"], name="licenses_expirat_6c1f2e_idx"),
                    models.Index(fields=["created_at"], name="licenses_created_4a9b0d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AdminKey",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("owner", models.CharField(help_text="Who this key was issued to", max_length=255)),
                ("key_prefix", models.CharField(editable=False, max_length=8)),
                ("key_hash", models.CharField(editable=False, max_length=64, unique=True)),
                ("is_active", models.BooleanField(default=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("last_used_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "admin_keys",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="LicenseLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("extended", "Extended"),
                            ("revoked", "Revoked"),
                        ],
                        max_length=20,
                    ),
                ),
                ("data", models.JSONField(default=dict, help_text="Details of the change")),
                (
                    "event_id",
                    models.UUIDField(
                        help_text="Domain event that produced this row", unique=True
                    ),
                ),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "license",
                    models.ForeignKey(
                        db_column="license_key",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="logs",
                        to="licenses.license",
                        to_field="key",
                    ),
                ),
            ],
            options={
                "db_table": "license_logs",
                "ordering": ["timestamp"],
                "indexes": [
                    models.Index(fields=["license", "timestamp"], name="license_log_license_3e8c71_idx"),
                    models.Index(fields=["kind"], name="license_log_kind_9d2f4a_idx"),
                ],
            },
        ),
    ]
