"""
Test settings: in-memory SQLite, no throttling, fixed vendor secrets.
"""
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"
ALLOWED_HOSTS = ["*"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": [],
}

SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": "test-jwt-secret"}  # noqa: F405
LEGACY_EMAIL_AUTH_ENABLED = True

TICKETMASTER_API_KEY = "tm-test-key"
STRIPE_SECRET_KEY = "sk_test_dummy"
STRIPE_WEBHOOK_SECRET = "whsec_test_secret"
