"""
Models for the events app.

An `Event` is the local, normalized copy of a ticketing-vendor event.  It is
keyed by the vendor's `external_id` and refreshed every time a search result
includes it.  A `UserEvent` records one user's relationship to an event
(interested, going or purchased); a user holds at most one row per type per
event.
"""
from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone


class Event(models.Model):
    """A concert or show, cached from the ticketing vendor."""

    SOURCE_CHOICES = [
        ("ticketmaster", "Ticketmaster"),
        ("manual", "Manual"),
    ]

    external_id = models.CharField(max_length=128, unique=True, null=True, blank=True)
    title = models.CharField(max_length=500)
    description = models.TextField(blank=True, null=True)
    artist_name = models.CharField(max_length=255, blank=True, null=True)
    venue_name = models.CharField(max_length=255, blank=True, null=True)
    # street, city, state, stateCode, country, countryCode, postalCode, latitude, longitude
    venue_address = models.JSONField(blank=True, null=True)
    event_date = models.DateTimeField(blank=True, null=True, db_index=True)
    ticket_url = models.URLField(max_length=1000, blank=True, null=True)
    image_url = models.URLField(max_length=1000, blank=True, null=True)
    genre = models.CharField(max_length=100, blank=True, null=True)
    # {"min", "max", "currency"}
    price_range = models.JSONField(blank=True, null=True)
    external_source = models.CharField(max_length=32, choices=SOURCE_CHOICES, default="ticketmaster")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.title


class UserEvent(models.Model):
    """A user's interaction with an event."""

    INTERESTED = "interested"
    GOING = "going"
    PURCHASED = "purchased"
    INTERACTION_CHOICES = [
        (INTERESTED, "Interested"),
        (GOING, "Going"),
        (PURCHASED, "Purchased"),
    ]
    INTERACTION_TYPES = [choice for choice, _ in INTERACTION_CHOICES]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="event_interactions")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="user_events")
    interaction_type = models.CharField(max_length=16, choices=INTERACTION_CHOICES)
    purchase_data = models.JSONField(blank=True, null=True)
    # refreshed when the same interaction is marked again
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "event", "interaction_type"], name="uniq_user_event_interaction"
            ),
        ]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="userevent_user_recent_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} {self.interaction_type} {self.event_id}"
