"""
WSGI entry point for Concert Connect.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "concert_connect.settings.dev")

application = get_wsgi_application()
