"""
App configuration for the core module.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """App configuration for core; owns the process service container."""

    name = "core"
    verbose_name = "License Shop Core"
    container = None

    def ready(self):
        """Build the service container once per process."""
        if self.container is None:
            from core.infrastructure.container import ServiceContainer

            self.container = ServiceContainer.from_django_settings()
