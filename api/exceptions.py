"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every domain failure becomes ``{"error": {"code", "message", "details"}}``
with a status derived from the exception type.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core import metrics
from core.domain.exceptions import (
    ActivationLimitReachedError,
    AlreadyPaidError,
    CatalogException,
    DeviceNotAuthorizedError,
    DomainException,
    IdentifierCollisionError,
    LicenseBannedError,
    LicenseExpiredError,
    LicenseNotFoundError,
    OrderCancelledError,
    OrderNotFoundError,
)

logger = logging.getLogger(__name__)

# Most specific first; anything else is a 400
DOMAIN_STATUS_CODES = (
    ((OrderNotFoundError, LicenseNotFoundError), status.HTTP_404_NOT_FOUND),
    ((AlreadyPaidError, OrderCancelledError), status.HTTP_409_CONFLICT),
    ((LicenseBannedError, DeviceNotAuthorizedError), status.HTTP_403_FORBIDDEN),
    ((LicenseExpiredError,), status.HTTP_410_GONE),
    ((ActivationLimitReachedError,), status.HTTP_422_UNPROCESSABLE_ENTITY),
    ((IdentifierCollisionError,), status.HTTP_503_SERVICE_UNAVAILABLE),
    ((CatalogException,), status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainException) -> int:
    """Return the HTTP status for a domain exception."""
    for exception_types, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exception_types):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, correlation_id, _get_endpoint(context))
    elif isinstance(exc, ValidationError):
        response = Response(
            {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request",
                    "details": exc.detail,
                }
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = {
            "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
        }
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, correlation_id)

    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else "unknown"


def _handle_domain_exception(
    exc: DomainException, correlation_id: Optional[str], endpoint: str
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for(exc)
    metrics.errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
    logger.warning(
        "Domain exception: %s - %s",
        exc.code,
        exc.message,
        extra={"correlation_id": correlation_id, "status_code": status_code},
    )
    return Response(
        {"error": {"code": exc.code, "message": exc.message, "details": exc.details}},
        status=status_code,
    )


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    metrics.errors_total.labels(
        error_type="INTERNAL_ERROR", endpoint=_get_endpoint(context)
    ).inc()
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
