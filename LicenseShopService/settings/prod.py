"""
Production settings for LicenseShopService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")

if not LICENSE_SHOP["ADMIN_SECRET"]:  # noqa: F405
    raise RuntimeError("LICENSE_SHOP_ADMIN_SECRET env var must be set")
