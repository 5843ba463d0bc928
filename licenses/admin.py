"""
Django admin configuration for licenses app.

Licenses and their logs are read-only here: every state change has to go
through the admin client so the lifecycle rules and audit trail apply.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import AdminKey, License, LicenseLog


class ReadOnlyAdmin(admin.ModelAdmin):
    """ModelAdmin that allows viewing only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


def _json_block(value):
    if value in (None, {}, []):
        return "-"
    return format_html(
        '<pre style="background: #f5f5f5; padding: 10px; '
        'border-radius: 4px; overflow-x: auto;">{}</pre>',
        json.dumps(value, indent=2),
    )


class LicenseLogInline(admin.TabularInline):
    model = LicenseLog
    extra = 0
    can_delete = False
    fields = ["kind", "timestamp", "data"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(License)
class LicenseAdmin(ReadOnlyAdmin):
    """Admin interface for License model."""

    list_display = ["key", "status_display", "expiration_date", "revoked_at", "created_at"]
    list_filter = ["revoked", "expiration_date", "created_at"]
    search_fields = ["key"]
    readonly_fields = [
        "id",
        "key",
        "expiration_date",
        "extra_data_display",
        "revoked",
        "revoked_at",
        "created_at",
        "updated_at",
    ]
    exclude = ["extra_data"]
    inlines = [LicenseLogInline]

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {"active": "green", "expired": "gray", "revoked": "red"}
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors[obj.status],
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def extra_data_display(self, obj):
        return _json_block(obj.extra_data)

    extra_data_display.short_description = "Extra data"


@admin.register(LicenseLog)
class LicenseLogAdmin(ReadOnlyAdmin):
    """Admin interface for LicenseLog model."""

    list_display = ["kind", "license", "timestamp"]
    list_filter = ["kind", "timestamp"]
    search_fields = ["license__key"]


@admin.register(AdminKey)
class AdminKeyAdmin(admin.ModelAdmin):
    """Admin interface for AdminKey model. Keys are issued with create_admin_key."""

    list_display = ["owner", "key_prefix", "is_active", "expires_at", "last_used_at"]
    list_filter = ["is_active"]
    search_fields = ["owner", "key_prefix"]
    readonly_fields = ["id", "key_prefix", "created_at", "last_used_at"]
    fields = ["id", "owner", "key_prefix", "is_active", "expires_at", "created_at", "last_used_at"]

    def has_add_permission(self, request):
        return False
