"""
Development settings for Concert Connect.

Extends the base settings by enabling debugging and allowing all hosts.  Do
not use these settings in production.
"""
from .base import *  # noqa

# Development toggles
DEBUG = True
ALLOWED_HOSTS = ["*", "127.0.0.1", "localhost"]
LOGGING["loggers"]["django.db.backends"] = {  # noqa: F405
    "handlers": ["console"], "level": "INFO", "propagate": False,
}
