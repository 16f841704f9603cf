"""
WSGI config for LicenseShopService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseShopService.settings.dev")

application = get_wsgi_application()
