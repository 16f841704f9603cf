"""
Request observability middleware.

Gives every request a correlation id (taken from ``X-Correlation-ID`` when
the caller sends one), writes one structured log line when the request
arrives and one when it leaves, and feeds the HTTP Prometheus metrics.
"""

import logging
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Scrapes and probes are logged at DEBUG only
QUIET_PATHS = ("/metrics/", "/health/", "/ready/")


class ObservabilityMiddleware:
    """Correlation ids, request logging and HTTP metrics."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        quiet = request.path in QUIET_PATHS

        logger.log(
            logging.DEBUG if quiet else logging.INFO,
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.path,
                "remote_addr": request.META.get("REMOTE_ADDR"),
            },
        )

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "path": request.path,
                    "error_type": type(exc).__name__,
                    "duration_ms": self._millis(started),
                },
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        self._record_metrics(request, response, duration)
        self._log_response(request, response, correlation_id, duration, quiet)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        return response

    @staticmethod
    def _millis(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)

    @staticmethod
    def _endpoint(request: HttpRequest) -> str:
        """Route name, or the raw path when the route has no name."""
        match = getattr(request, "resolver_match", None)
        if match and match.view_name:
            return match.view_name
        return request.path

    def _record_metrics(self, request: HttpRequest, response: HttpResponse, duration: float):
        endpoint = self._endpoint(request)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status_code=str(response.status_code)
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
            duration
        )

    def _log_response(self, request, response, correlation_id, duration, quiet):
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.DEBUG if quiet else logging.INFO

        logger.log(
            level,
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            },
        )
