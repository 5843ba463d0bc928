"""
Admin key authentication middleware.

This middleware validates admin keys for the license admin API.
"""

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.exceptions import InvalidAdminKeyError
from licenses.infrastructure.models import AdminKey, hash_admin_key

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


def _unauthorized(message: str) -> JsonResponse:
    error = InvalidAdminKeyError(message)
    return JsonResponse({"error": {"code": error.code, "message": error.message}}, status=401)


class AdminKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin key authentication.

    This middleware:
    1. Validates admin keys for the admin API (/api/v1/admin/*)
    2. Returns 401 Unauthorized if authentication fails
    3. Leaves every other path alone
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None
        return self._authenticate_admin_api(request)

    def _authenticate_admin_api(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate admin API request.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if auth fails, None if successful
        """
        header = getattr(settings, "ADMIN_KEY_HEADER", "X-Admin-Key")
        raw_key = request.headers.get(header)
        if not raw_key:
            authorization = request.headers.get("Authorization", "")
            if authorization.startswith("Bearer "):
                raw_key = authorization[len("Bearer ") :]

        if not raw_key:
            return _unauthorized(f"Missing admin key. Provide {header} header.")

        admin_key = AdminKey.objects.filter(key_hash=hash_admin_key(raw_key)).first()
        if not admin_key:
            logger.warning("Invalid admin key attempted: %s...", raw_key[:8])
            return _unauthorized("Invalid admin key")

        if not admin_key.is_valid():
            logger.warning("Inactive or expired admin key attempted: %s...", raw_key[:8])
            return _unauthorized("Admin key expired or disabled")

        admin_key.mark_used()
        request.admin_key = admin_key  # type: ignore
        return None
