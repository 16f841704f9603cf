"""
Admin shared-secret middleware.

Admin APIs (/api/v1/admin/*) require the ``X-Admin-Secret`` header to
equal the configured admin secret. This is the only authentication the
service has.
"""

import hmac
import logging
from typing import Optional

from django.apps import apps
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = "/api/v1/admin/"
ADMIN_SECRET_HEADER = "X-Admin-Secret"


class AdminSecretMiddleware(MiddlewareMixin):
    """
    Middleware for the admin shared secret.

    Returns 401 when the header is missing and 403 when it does not match
    or no secret is configured.
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and check the admin secret.

        Args:
            request: HTTP request

        Returns:
            JsonResponse with 401/403 if the check fails, None otherwise
        """
        if not request.path.startswith(ADMIN_PATH_PREFIX):
            return None

        provided = request.headers.get(ADMIN_SECRET_HEADER, "")
        if not provided:
            return JsonResponse(
                {
                    "error": {
                        "code": "ADMIN_SECRET_REQUIRED",
                        "message": f"Missing admin secret. Provide {ADMIN_SECRET_HEADER} header.",
                    }
                },
                status=401,
            )

        expected = apps.get_app_config("core").container.settings.admin_secret
        if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
            logger.warning("Invalid admin secret attempted", extra={"path": request.path})
            return JsonResponse(
                {"error": {"code": "FORBIDDEN", "message": "Invalid admin secret"}},
                status=403,
            )

        return None
