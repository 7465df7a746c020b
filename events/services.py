"""
Event domain operations.

Search results from the ticketing vendor are cached locally through
:func:`upsert_event`; everything else works against the local tables.
Uniqueness of ``(user, event, interaction_type)`` is enforced by the
database and every write here goes through ``update_or_create`` so that
concurrent duplicate calls update the same row.
"""
import logging
from collections import defaultdict

from django.db import DatabaseError, transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from common.exceptions import ResourceNotFound

from .models import Event, UserEvent
from .ticketmaster import GENRES, TicketmasterClient

logger = logging.getLogger(__name__)

# fields refreshed on every search hit; description is never overwritten
MUTABLE_FIELDS = (
    "title",
    "artist_name",
    "venue_name",
    "venue_address",
    "event_date",
    "ticket_url",
    "image_url",
    "genre",
    "price_range",
)

FEATURED_DEFAULT_LIMIT = 10
FEATURED_MAX_LIMIT = 50
SEARCH_MAX_SIZE = 50


def _is_authenticated(user) -> bool:
    return user is not None and user.is_authenticated


def validate_interaction_type(interaction_type) -> str:
    if interaction_type not in UserEvent.INTERACTION_TYPES:
        raise ValidationError("Invalid interaction type. Must be: interested, going, or purchased")
    return interaction_type


def upsert_event(normalized: dict) -> Event:
    """Insert the event if its external id is new, else merge the mutable fields."""
    defaults = {field: normalized.get(field) for field in MUTABLE_FIELDS}
    defaults["external_source"] = normalized.get("external_source") or "ticketmaster"
    event, created = Event.objects.update_or_create(
        external_id=normalized["external_id"],
        defaults=defaults,
    )
    if created and normalized.get("description"):
        event.description = normalized["description"]
        event.save(update_fields=["description"])
    return event


def interaction_map(user, event_ids) -> dict:
    """``{event_id: [interaction_type, ...]}`` for the caller, limited to ``event_ids``."""
    mapping = defaultdict(list)
    if not _is_authenticated(user):
        return mapping
    rows = UserEvent.objects.filter(user=user, event_id__in=list(event_ids)).values_list(
        "event_id", "interaction_type"
    )
    for event_id, interaction_type in rows:
        mapping[event_id].append(interaction_type)
    return mapping


def search_events(user, query: dict, client=None) -> tuple:
    """
    Search the vendor, cache every hit and return ``(events, pagination)``.

    ``query`` holds validated search parameters.  An authenticated caller
    with a stored location searches there when no city or state is given.
    """
    client = client or TicketmasterClient()

    city = query.get("city") or None
    state = query.get("state") or None
    if _is_authenticated(user) and not city and not state:
        profile = getattr(user, "profile", None)
        if profile is not None:
            city, state = profile.city, profile.state

    result = client.search(
        city=city,
        state_code=state,
        genre=query.get("genre") or None,
        keyword=query.get("keyword") or None,
        start=query.get("startDate"),
        end=query.get("endDate"),
        size=min(query.get("size") or 20, SEARCH_MAX_SIZE),
        page=query.get("page") or 0,
        radius=query.get("radius"),
        sort=query.get("sort") or "date,asc",
    )

    events = []
    for normalized in result["events"]:
        if not normalized.get("external_id"):
            continue
        try:
            with transaction.atomic():
                events.append(upsert_event(normalized))
        except DatabaseError:
            logger.error("Error storing event external_id=%s", normalized.get("external_id"), exc_info=True)
    return events, result["pagination"]


def get_event(event_id) -> Event:
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        raise ResourceNotFound("Event")
    return event


def mark_interest(user, event_id, interaction_type) -> UserEvent:
    """Create the interaction, or refresh its timestamp when it already exists."""
    validate_interaction_type(interaction_type)
    event = get_event(event_id)
    user_event, _ = UserEvent.objects.update_or_create(
        user=user,
        event=event,
        interaction_type=interaction_type,
        defaults={"created_at": timezone.now()},
    )
    logger.info("User %s marked %s for event %s", user.email, interaction_type, event.title)
    return user_event


def remove_interest(user, event_id, interaction_type) -> None:
    validate_interaction_type(interaction_type)
    deleted, _ = UserEvent.objects.filter(
        user=user, event_id=event_id, interaction_type=interaction_type
    ).delete()
    if not deleted:
        raise ResourceNotFound("User event interaction")
    logger.info("User %s removed %s for event %s", user.email, interaction_type, event_id)


def record_purchase(user_id, event_id, purchase_data: dict) -> UserEvent:
    """Upsert the ``purchased`` interaction that backs a succeeded payment."""
    user_event, _ = UserEvent.objects.update_or_create(
        user_id=user_id,
        event_id=event_id,
        interaction_type=UserEvent.PURCHASED,
        defaults={"purchase_data": purchase_data, "created_at": timezone.now()},
    )
    return user_event


def my_events(user, interaction_type=None) -> tuple:
    """
    Return ``(grouped, total)`` where ``grouped`` maps each interaction type
    to the caller's rows, newest first.  With a filter only that key is present.
    """
    types = UserEvent.INTERACTION_TYPES
    rows = UserEvent.objects.filter(user=user).select_related("event").order_by("-created_at", "-id")
    if interaction_type:
        types = [validate_interaction_type(interaction_type)]
        rows = rows.filter(interaction_type=interaction_type)

    grouped = {t: [] for t in types}
    total = 0
    for row in rows:
        grouped[row.interaction_type].append(row)
        total += 1
    return grouped, total


def featured_upcoming(limit=FEATURED_DEFAULT_LIMIT):
    limit = max(1, min(limit, FEATURED_MAX_LIMIT))
    return list(
        Event.objects.filter(event_date__gte=timezone.now(), is_active=True).order_by("event_date", "id")[:limit]
    )


def available_genres() -> list:
    return list(GENRES)
