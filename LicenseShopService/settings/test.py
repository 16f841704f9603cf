"""
Test settings for LicenseShopService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Capture outgoing mail in django.core.mail.outbox
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

LICENSE_SHOP = {
    **LICENSE_SHOP,  # noqa: F405
    "MAX_ACTIVATIONS": 3,
    "ADMIN_SECRET": "test-admin-secret",
    "ORDER_ID_PREFIX": "SNK",
    "SEND_LICENSE_EMAILS": True,
}

# Disable logging during tests
LOGGING_CONFIG = None
