"""
Bearer credential authentication.

Accepts: Authorization: Bearer <credential>

The credential is resolved once by :func:`resolve_credential` into one of
two explicit kinds:

* ``SignedCredential`` - a Simple JWT access token carrying ``user_id`` and
  ``email`` claims (issued by register/login, 24h lifetime by default).
* ``LegacySessionEmail`` - a bare email address, sent by the web session
  proxy.  Only accepted while ``LEGACY_EMAIL_AUTH_ENABLED`` is on.

The DRF authentication class never raises.  A request whose credential does
not resolve is left anonymous; endpoints that require identity reject it via
``IsAuthenticated`` and the exception handler reports the recorded reason.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_TOKEN = "Invalid or expired token"


@dataclass(frozen=True)
class SignedCredential:
    user_id: int
    email: str


@dataclass(frozen=True)
class LegacySessionEmail:
    email: str


Credential = Union[SignedCredential, LegacySessionEmail]


def _is_email(value: str) -> bool:
    try:
        validate_email(value)
    except DjangoValidationError:
        return False
    return True


def resolve_credential(raw: str) -> Optional[Credential]:
    """Classify a raw bearer value; ``None`` when it is neither kind."""
    raw = (raw or "").strip()
    if not raw:
        return None

    try:
        token = AccessToken(raw)
    except TokenError:
        token = None

    if token is not None:
        user_id = token.get(api_settings.USER_ID_CLAIM)
        if user_id is not None:
            return SignedCredential(user_id=int(user_id), email=(token.get("email") or "").lower())

    if getattr(settings, "LEGACY_EMAIL_AUTH_ENABLED", False) and _is_email(raw):
        return LegacySessionEmail(email=raw.lower())

    return None


def issue_token(user) -> str:
    """Mint a signed access token for ``user``."""
    token = AccessToken.for_user(user)
    token["email"] = user.email
    return str(token)


def _load_user(credential: Credential):
    if isinstance(credential, SignedCredential):
        return User.objects.filter(pk=credential.user_id, is_active=True).first()
    return User.objects.filter(username=credential.email, is_active=True).first()


class BearerCredentialAuthentication(BaseAuthentication):
    """
    Attach the user behind a bearer credential to the request.

    ``request.auth`` is the resolved credential.  Unresolvable credentials
    set ``request.auth_failure`` and leave the request anonymous.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        header = get_authorization_header(request).decode("utf-8", errors="ignore")
        if not header:
            return None

        parts = header.split(" ", 1)
        if parts[0].lower() != self.keyword.lower() or len(parts) < 2 or not parts[1].strip():
            request.auth_failure = INVALID_TOKEN
            return None

        credential = resolve_credential(parts[1])
        if credential is None:
            request.auth_failure = INVALID_TOKEN
            return None

        user = _load_user(credential)
        if user is None:
            logger.info("Bearer credential did not match an active user kind=%s", type(credential).__name__)
            request.auth_failure = INVALID_TOKEN
            return None

        return user, credential

    def authenticate_header(self, request):
        return self.keyword
