"""WSGI config exposing the ``application`` callable."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "src.config.settings.production")

application = get_wsgi_application()
