"""
Serializers for the license admin API.
"""

from rest_framework import serializers


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    expiration_date = serializers.DateTimeField(required=False, allow_null=True)
    extra_data = serializers.JSONField(required=False, allow_null=True)


class ExtendLicenseRequestSerializer(serializers.Serializer):
    """Serializer for extend license request."""

    expiration_date = serializers.DateTimeField(required=True)


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    key = serializers.CharField()
    status = serializers.ChoiceField(choices=["active", "expired", "revoked"])
    expiration_date = serializers.DateTimeField(allow_null=True)
    extra_data = serializers.JSONField(allow_null=True)
    revoked = serializers.BooleanField()
    revoked_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
