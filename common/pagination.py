"""
Pagination utilities for the project.

Feeds and histories are paged with a zero-based ``page`` and a ``limit``
query parameter, matching what the mobile and web clients send.  The
limits are controlled centrally here rather than duplicated throughout
the codebase.
"""
from rest_framework.exceptions import ValidationError

DEFAULT_LIMIT = 20
MAX_LIMIT = 50
# keeps page * limit well inside a 32-bit OFFSET
MAX_PAGE = 100_000


def parse_int(value, name: str, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def page_params(request, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> tuple[int, int]:
    """Return ``(page, limit)`` from the query string, clamped to sane bounds."""
    page = parse_int(request.query_params.get("page"), "page", 0)
    if page > MAX_PAGE:
        raise ValidationError(f"page must be at most {MAX_PAGE}")
    limit = parse_int(request.query_params.get("limit"), "limit", default_limit)
    return max(page, 0), max(1, min(limit, max_limit))
