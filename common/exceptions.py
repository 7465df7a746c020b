"""
Error handling for the REST API.

Domain code raises Django REST framework exceptions (``ValidationError``,
``PermissionDenied``, ``NotAuthenticated``) plus the two project-specific
classes below.  ``api_exception_handler`` is installed as DRF's
``EXCEPTION_HANDLER`` and renders every failure as
``{"success": false, "message": ...}``.  Unexpected exceptions are logged
with request context and returned as a generic 500.
"""
from __future__ import annotations

import logging
import traceback

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from django.utils import timezone
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ResourceNotFound(exceptions.NotFound):
    """404 carrying a ``"<Resource> not found"`` message."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class VendorUnavailable(exceptions.APIException):
    """A third-party vendor timed out or could not be reached."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service unavailable, please retry."
    default_code = "vendor_unavailable"


def first_message(detail) -> str:
    """Flatten a DRF error detail (str, list or dict) to its first message."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            msg = first_message(value)
            if key in ("non_field_errors", "detail"):
                return msg
            return f"{key}: {msg}"
        return ""
    if isinstance(detail, (list, tuple)):
        return first_message(detail[0]) if detail else ""
    return str(detail)


def _request_context(request) -> dict:
    user = getattr(request, "user", None)
    return {
        "url": request.get_full_path() if request is not None else None,
        "method": getattr(request, "method", None),
        "user_id": getattr(user, "id", None),
        "timestamp": timezone.now().isoformat(),
    }


def api_exception_handler(exc, context):
    request = context.get("request")

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        if isinstance(exc, exceptions.NotAuthenticated):
            message = getattr(request, "auth_failure", None) or "Access token required"
        else:
            message = first_message(exc.detail)

        if exc.status_code >= 500:
            logger.error("API error %s: %s context=%s", exc.status_code, message, _request_context(request))
        else:
            logger.info("API error %s: %s", exc.status_code, message)

        headers = {}
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            headers["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait:
            headers["Retry-After"] = "%d" % wait

        return Response(
            {"success": False, "message": message},
            status=exc.status_code,
            headers=headers,
        )

    logger.error("Unhandled error context=%s", _request_context(request), exc_info=exc)
    body = {"success": False, "message": "Internal server error"}
    if settings.DEBUG:
        body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
