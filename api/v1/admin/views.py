"""
License admin API views.

These endpoints are used by trusted administrative callers to:
- Issue licenses
- Extend and revoke licenses
- Look up a license and its current status

All of them require an admin key (see AdminKeyAuthenticationMiddleware).
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body
from api.v1.admin.serializers import (
    CreateLicenseRequestSerializer,
    ExtendLicenseRequestSerializer,
    LicenseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.admin_client import build_admin_client
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

ERROR_RESPONSES = {
    400: {"description": "Bad Request - malformed arguments"},
    401: {"description": "Unauthorized - Missing or invalid admin key"},
}


def _validation_failed(span, serializer) -> Response:
    span.set_attribute("error", "validation_failed")
    span.set_status(Status(StatusCode.ERROR, "Validation failed"))
    return Response(
        error_body("INVALID_INPUT", "Request validation failed", details=serializer.errors),
        status=status.HTTP_400_BAD_REQUEST,
    )


class CreateLicenseView(APIView):
    """View for issuing licenses."""

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Issue a new license with a freshly generated key. "
            "Omitting expiration_date creates a license that never expires. "
            "extra_data is stored and returned verbatim."
        ),
        tags=["Admin API"],
        request=CreateLicenseRequestSerializer,
        responses={201: LicenseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create_license)(request)

    async def _handle_create_license(self, request: Request) -> Response:
        """Async handler for create license."""
        with tracer.start_as_current_span("create_license") as span:
            span.set_attribute("operation", "create_license")

            serializer = CreateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            expiration_date = serializer.validated_data.get("expiration_date")
            span.set_attribute("license.has_expiration", expiration_date is not None)

            result = await build_admin_client(_license_repo).create_license(
                expiration_date=expiration_date,
                extra_data=serializer.validated_data.get("extra_data"),
            )

            span.set_attribute("license.key", result.key)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """View for looking up a license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Return a license with its status derived at request time.",
        tags=["Admin API"],
        responses={
            200: LicenseSerializer,
            **ERROR_RESPONSES,
            404: {"description": "Not Found - unknown license key"},
        },
    )
    def get(self, request: Request, key: str) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get_license)(request, key)

    async def _handle_get_license(self, request: Request, key: str) -> Response:
        """Async handler for get license."""
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.key", key)

            result = await build_admin_client(_license_repo).get_license(key)

            span.set_attribute("license.status", result.status)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_200_OK)


class ExtendLicenseView(APIView):
    """View for extending licenses."""

    @extend_schema(
        operation_id="extend_license",
        summary="Extend License",
        description=(
            "Move a license's expiration date forward. The new date must be "
            "strictly later than the current one; revoked licenses and "
            "licenses without an expiration cannot be extended."
        ),
        tags=["Admin API"],
        request=ExtendLicenseRequestSerializer,
        responses={
            200: LicenseSerializer,
            **ERROR_RESPONSES,
            404: {"description": "Not Found - unknown license key"},
            409: {"description": "Conflict - license is revoked"},
            422: {"description": "Unprocessable - expiration would not move forward"},
        },
    )
    def patch(self, request: Request, key: str) -> Response:
        """Extend a license."""
        return async_to_sync(self._handle_extend_license)(request, key)

    async def _handle_extend_license(self, request: Request, key: str) -> Response:
        """Async handler for extend license."""
        with tracer.start_as_current_span("extend_license") as span:
            span.set_attribute("license.key", key)

            serializer = ExtendLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return _validation_failed(span, serializer)

            new_expiration = serializer.validated_data["expiration_date"]
            span.set_attribute("license.new_expiration", new_expiration.isoformat())

            result = await build_admin_client(_license_repo).extend_license(key, new_expiration)

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_200_OK)


class RevokeLicenseView(APIView):
    """View for revoking licenses."""

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description=(
            "Permanently revoke a license. Revoking an already revoked "
            "license succeeds and changes nothing."
        ),
        tags=["Admin API"],
        request=None,
        responses={
            200: LicenseSerializer,
            **ERROR_RESPONSES,
            404: {"description": "Not Found - unknown license key"},
        },
    )
    def patch(self, request: Request, key: str) -> Response:
        """Revoke a license."""
        return async_to_sync(self._handle_revoke_license)(request, key)

    async def _handle_revoke_license(self, request: Request, key: str) -> Response:
        """Async handler for revoke license."""
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("license.key", key)

            client = build_admin_client(_license_repo)
            await client.revoke_license(key)
            result = await client.get_license(key)

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_200_OK)
