"""WSGI entry point, e.g. ``gunicorn orderplacement.wsgi``."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "orderplacement.settings")

application = get_wsgi_application()
