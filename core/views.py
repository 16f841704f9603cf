"""
Core views for health checks and metrics exposition.
"""

from django.apps import apps
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "license-shop"})


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Ready once the service container has been built."""
        ready = apps.get_app_config("core").container is not None
        return JsonResponse(
            {"status": "ready" if ready else "not_ready", "checks": {"container": ready}},
            status=200 if ready else 503,
        )


class MetricsView(View):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
