"""
Ticketmaster Discovery API client.

`TicketmasterClient.search` calls ``GET /events.json`` and returns the
normalized page produced by :func:`normalize_events`:

    {"events": [<event fields keyed like events.models.Event>],
     "pagination": {"page", "size", "totalElements", "totalPages"}}

Idempotent GETs are retried a bounded number of times on gateway errors and
connection failures.  Vendor failures surface as ``ValidationError``
("Ticketmaster error: ...") except timeouts and unreachable hosts, which
raise ``VendorUnavailable``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone as dt_timezone
from typing import Any, Optional

import requests
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time
from requests.adapters import HTTPAdapter
from rest_framework.exceptions import ValidationError
from urllib3.util.retry import Retry

from common.exceptions import VendorUnavailable

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_TIME = "20:00:00"
DEFAULT_GENRE = "music"
EXTERNAL_SOURCE = "ticketmaster"

GENRES = [
    "rock",
    "pop",
    "country",
    "hip-hop",
    "jazz",
    "blues",
    "electronic",
    "classical",
    "folk",
    "reggae",
    "r&b",
    "metal",
    "punk",
    "indie",
    "alternative",
]


def format_api_datetime(value: datetime) -> str:
    """Discovery API wants UTC without fractional seconds: 2025-01-31T20:00:00Z."""
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value.astimezone(dt_timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class TicketmasterClient:
    """Thin wrapper over a retrying ``requests.Session``."""

    def __init__(self, api_key=None, base_url=None, timeout=None, max_retries=None, session=None):
        self.api_key = api_key if api_key is not None else settings.TICKETMASTER_API_KEY
        self.base_url = (base_url or settings.TICKETMASTER_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.TICKETMASTER_TIMEOUT
        retries = settings.TICKETMASTER_MAX_RETRIES if max_retries is None else max_retries
        self.session = session or self._build_session(retries)

    @staticmethod
    def _build_session(max_retries: int) -> requests.Session:
        retry = Retry(
            total=max_retries,
            backoff_factor=0.3,
            status_forcelist=(502, 503, 504),
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False,
        )
        session = requests.Session()
        session.mount("https://", HTTPAdapter(max_retries=retry))
        session.mount("http://", HTTPAdapter(max_retries=retry))
        return session

    def search(
        self,
        *,
        city: Optional[str] = None,
        state_code: Optional[str] = None,
        genre: Optional[str] = None,
        keyword: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        size: int = 20,
        page: int = 0,
        radius: Optional[int] = None,
        unit: Optional[str] = None,
        sort: str = "date,asc",
    ) -> dict:
        if not self.api_key:
            logger.warning("Ticketmaster API key not configured")
            raise ValidationError("Ticketmaster error: API key not configured")

        params: dict[str, Any] = {"apikey": self.api_key, "size": size, "page": page, "sort": sort}
        if city:
            params["city"] = city
        if state_code:
            params["stateCode"] = state_code
        if keyword:
            params["keyword"] = keyword
        if radius:
            params["radius"] = radius
        if unit:
            params["unit"] = unit
        if genre:
            params["classificationName"] = genre
        if start and end:
            params["startDateTime"] = format_api_datetime(start)
            params["endDateTime"] = format_api_datetime(end)

        logged = {k: v for k, v in params.items() if k != "apikey"}
        logger.info("Searching Ticketmaster events params=%s", logged)
        return normalize_events(self._get("/events.json", params))

    def _get(self, path: str, params: dict) -> dict:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except (requests.Timeout, requests.ConnectionError) as exc:
            logger.error("Ticketmaster unreachable url=%s error=%s", url, exc)
            raise VendorUnavailable("Ticketmaster is unavailable, please retry.") from exc

        if resp.status_code == 401:
            raise ValidationError("Ticketmaster error: invalid API key")
        if resp.status_code == 429:
            raise ValidationError("Ticketmaster error: rate limit exceeded")
        if resp.status_code in (502, 503, 504):
            logger.error("Ticketmaster gateway error status=%s", resp.status_code)
            raise VendorUnavailable("Ticketmaster is unavailable, please retry.")
        if resp.status_code != 200:
            logger.warning(
                "Non-200 response from Ticketmaster status=%s body_snippet=%r",
                resp.status_code,
                resp.text[:300],
            )
            raise ValidationError(f"Ticketmaster error: request failed with status {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise ValidationError("Ticketmaster error: malformed response") from exc


def _pick_image(images) -> Optional[str]:
    images = images or []
    for img in images:
        if img.get("ratio") == "16_9" and img.get("url"):
            return img["url"]
    return images[0].get("url") if images else None


def _event_date(start: dict) -> Optional[datetime]:
    if start.get("dateTime"):
        parsed = parse_datetime(start["dateTime"])
        if parsed is not None:
            return parsed if timezone.is_aware(parsed) else timezone.make_aware(parsed)

    local_date = parse_date(start.get("localDate") or "")
    if local_date is None:
        return None
    local_time = parse_time(start.get("localTime") or DEFAULT_LOCAL_TIME) or parse_time(DEFAULT_LOCAL_TIME)
    return timezone.make_aware(datetime.combine(local_date, local_time))


def _float_or_none(value):
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _venue_address(venue: Optional[dict]) -> Optional[dict]:
    if not venue:
        return None
    location = venue.get("location") or {}
    return {
        "street": (venue.get("address") or {}).get("line1"),
        "city": (venue.get("city") or {}).get("name"),
        "state": (venue.get("state") or {}).get("name"),
        "stateCode": (venue.get("state") or {}).get("stateCode"),
        "country": (venue.get("country") or {}).get("name"),
        "countryCode": (venue.get("country") or {}).get("countryCode"),
        "postalCode": venue.get("postalCode"),
        "latitude": _float_or_none(location.get("latitude")),
        "longitude": _float_or_none(location.get("longitude")),
    }


def normalize_event(raw: dict) -> dict:
    embedded = raw.get("_embedded") or {}
    venue = (embedded.get("venues") or [None])[0]
    attraction = (embedded.get("attractions") or [None])[0] or {}
    classification = (raw.get("classifications") or attraction.get("classifications") or [{}])[0] or {}

    genre = (
        ((classification.get("genre") or {}).get("name") or "").lower()
        or ((classification.get("segment") or {}).get("name") or "").lower()
        or DEFAULT_GENRE
    )

    price = (raw.get("priceRanges") or [None])[0]
    price_range = (
        {"min": price.get("min"), "max": price.get("max"), "currency": price.get("currency")} if price else None
    )

    return {
        "external_id": raw.get("id"),
        "title": raw.get("name") or "",
        "description": None,
        "artist_name": attraction.get("name"),
        "venue_name": (venue or {}).get("name"),
        "venue_address": _venue_address(venue),
        "event_date": _event_date((raw.get("dates") or {}).get("start") or {}),
        "ticket_url": raw.get("url"),
        "image_url": _pick_image(raw.get("images")) or _pick_image(attraction.get("images")),
        "genre": genre,
        "price_range": price_range,
        "external_source": EXTERNAL_SOURCE,
    }


def normalize_events(payload: dict) -> dict:
    """Project a Discovery API search response onto local event fields."""
    events = ((payload or {}).get("_embedded") or {}).get("events") or []
    page = (payload or {}).get("page") or {}
    return {
        "events": [normalize_event(raw) for raw in events],
        "pagination": {
            "page": page.get("number", 0),
            "size": page.get("size", len(events)),
            "totalElements": page.get("totalElements", len(events)),
            "totalPages": page.get("totalPages", 1 if events else 0),
        },
    }
