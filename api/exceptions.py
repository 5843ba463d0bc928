"""
API exception handlers.

This module maps domain exceptions and DRF errors onto the REST error body
``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    InvalidAdminKeyError,
    InvalidExtensionError,
    InvalidLicenseInputError,
    LicenseAlreadyRevokedError,
    LicenseNotFoundError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = {
    InvalidLicenseInputError: status.HTTP_400_BAD_REQUEST,
    LicenseNotFoundError: status.HTTP_404_NOT_FOUND,
    LicenseAlreadyRevokedError: status.HTTP_409_CONFLICT,
    InvalidExtensionError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidAdminKeyError: status.HTTP_401_UNAUTHORIZED,
}


def error_body(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Build the error response body."""
    return {"error": {"code": code, "message": message, **extra}}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail) if isinstance(
            response.data, dict
        ) else exc.default_detail
        response.data = error_body(code, str(detail))
        errors_total.labels(error_type=code, endpoint=endpoint).inc()
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, trace_id)
        errors_total.labels(error_type="INTERNAL_ERROR", endpoint=endpoint).inc()

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = DOMAIN_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
