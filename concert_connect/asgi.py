"""
ASGI entry point for Concert Connect.

Only HTTP is served; there are no websocket routes.  The default
settings module is set to the development configuration.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "concert_connect.settings.dev")

application = get_asgi_application()
