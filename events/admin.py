"""
Admin configuration for the events app.

Defines the list display and search fields for cached events and user
interactions in the Django admin site.
"""
from django.contrib import admin

from .models import Event, UserEvent


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("title", "artist_name", "venue_name", "event_date", "genre", "is_active")
    list_filter = ("is_active", "genre", "external_source")
    search_fields = ("title", "artist_name", "venue_name", "external_id")


@admin.register(UserEvent)
class UserEventAdmin(admin.ModelAdmin):
    list_display = ("user", "event", "interaction_type", "created_at")
    list_filter = ("interaction_type",)
    search_fields = ("user__email", "event__title")
