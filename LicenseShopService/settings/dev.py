"""
Development settings for LicenseShopService.
"""

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

LOGGING = get_logging_config("development")

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

# Known admin secret for local use only
LICENSE_SHOP["ADMIN_SECRET"] = LICENSE_SHOP["ADMIN_SECRET"] or "dev-admin-secret"  # noqa: F405
