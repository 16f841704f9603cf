"""
Access to the process service container from the API views.
"""

from django.apps import apps

from core.infrastructure.container import ServiceContainer


def get_container() -> ServiceContainer:
    """Return the container built by ``CoreConfig.ready()``."""
    return apps.get_app_config("core").container
