"""
Core views for health checks and system status.
"""

from typing import Optional

from asgiref.sync import async_to_sync
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


def _database_connected() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except DatabaseError:
        return False


def _license_count() -> Optional[int]:
    """Number of stored licenses, or None if the store cannot be read."""
    try:
        return async_to_sync(DjangoLicenseRepository().count)()
    except DatabaseError:
        return None


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "license-authority"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        if _database_connected():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        license_count = _license_count()
        checks = {
            "database": _database_connected(),
            "license_store": license_count is not None,
        }

        all_healthy = all(checks.values())
        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
                "licenses": license_count,
            },
            status=200 if all_healthy else 503,
        )
