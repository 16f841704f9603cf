"""
Base Django settings for LicenseShopService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-3m!x0$k7q@p2v9w#license-shop-dev-only"
)

DEBUG = False

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "core.apps.CoreConfig",
    "catalog",
    "orders",
    "licenses",
    "sales",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.admin_auth.AdminSecretMiddleware",
]

ROOT_URLCONF = "LicenseShopService.urls"

WSGI_APPLICATION = "LicenseShopService.wsgi.application"
ASGI_APPLICATION = "LicenseShopService.asgi.application"

# Orders and licenses live in process memory (core.infrastructure.store);
# the database is only here for Django's contrib apps.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Shop API",
    "DESCRIPTION": (
        "Sells time-bounded software licenses for simulated payments. "
        "Provides endpoints for ordering, payment confirmation, license "
        "validation/activation and admin statistics."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Shop API", "description": "Catalog, orders and payments"},
        {"name": "License API", "description": "License validation and activation"},
        {"name": "Admin API", "description": "Sales statistics (shared secret)"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Email delivery of license keys
EMAIL_BACKEND = os.environ.get(
    "EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend"
)
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "support@example.com")

# License shop
LICENSE_SHOP = {
    "MAX_ACTIVATIONS": int(os.environ.get("LICENSE_SHOP_MAX_ACTIVATIONS", "3")),
    "ADMIN_SECRET": os.environ.get("LICENSE_SHOP_ADMIN_SECRET", ""),
    "ORDER_ID_PREFIX": os.environ.get("LICENSE_SHOP_ORDER_ID_PREFIX", "SNK"),
    "PERPETUAL_YEARS": int(os.environ.get("LICENSE_SHOP_PERPETUAL_YEARS", "100")),
    "RECENT_ORDERS_LIMIT": int(os.environ.get("LICENSE_SHOP_RECENT_ORDERS_LIMIT", "10")),
    "SEND_LICENSE_EMAILS": os.environ.get("LICENSE_SHOP_SEND_EMAILS", "true").lower() == "true",
    "FROM_EMAIL": DEFAULT_FROM_EMAIL,
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
