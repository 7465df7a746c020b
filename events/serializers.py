"""
Serializers for the events app.

Event payloads are camelCase.  When a view passes an ``interactions``
mapping (event id -> interaction types) in the serializer context, every
event additionally carries ``userInteractions`` for the caller.
"""
from rest_framework import serializers

from .models import Event, UserEvent

SORT_CHOICES = ["date,asc", "date,desc", "relevance,desc", "distance,asc"]


class EventSerializer(serializers.ModelSerializer):
    externalId = serializers.CharField(source="external_id", read_only=True)
    artistName = serializers.CharField(source="artist_name", read_only=True)
    venueName = serializers.CharField(source="venue_name", read_only=True)
    venueAddress = serializers.JSONField(source="venue_address", read_only=True)
    eventDate = serializers.DateTimeField(source="event_date", read_only=True)
    ticketUrl = serializers.CharField(source="ticket_url", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    priceRange = serializers.JSONField(source="price_range", read_only=True)
    externalSource = serializers.CharField(source="external_source", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Event
        fields = [
            "id", "externalId", "title", "description", "artistName", "venueName", "venueAddress",
            "eventDate", "ticketUrl", "imageUrl", "genre", "priceRange", "externalSource", "isActive",
            "createdAt", "updatedAt",
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        interactions = self.context.get("interactions")
        if interactions is not None:
            data["userInteractions"] = sorted(interactions.get(instance.id, []))
        return data


class EventSummarySerializer(serializers.ModelSerializer):
    """Compact event embedded in posts and payments."""

    artistName = serializers.CharField(source="artist_name", read_only=True)
    venueName = serializers.CharField(source="venue_name", read_only=True)
    eventDate = serializers.DateTimeField(source="event_date", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)

    class Meta:
        model = Event
        fields = ["id", "title", "artistName", "venueName", "eventDate", "imageUrl"]


class UserEventSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    eventId = serializers.IntegerField(source="event_id", read_only=True)
    interactionType = serializers.CharField(source="interaction_type", read_only=True)
    purchaseData = serializers.JSONField(source="purchase_data", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserEvent
        fields = ["id", "userId", "eventId", "interactionType", "purchaseData", "createdAt"]


class InteractionEventSerializer(serializers.BaseSerializer):
    """An interaction row rendered as its event plus ``interactionDate``."""

    def to_representation(self, instance):
        data = EventSerializer(instance.event).data
        data["interactionDate"] = serializers.DateTimeField().to_representation(instance.created_at)
        return data


class EventSearchQuerySerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True)
    state = serializers.CharField(required=False, allow_blank=True)
    genre = serializers.CharField(required=False, allow_blank=True)
    keyword = serializers.CharField(required=False, allow_blank=True)
    startDate = serializers.DateTimeField(required=False, input_formats=["iso-8601", "%Y-%m-%d"])
    endDate = serializers.DateTimeField(required=False, input_formats=["iso-8601", "%Y-%m-%d"])
    page = serializers.IntegerField(required=False, min_value=0, default=0)
    size = serializers.IntegerField(required=False, min_value=1, default=20)
    radius = serializers.IntegerField(required=False, min_value=1, default=50)
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, default="date,asc")

    def validate(self, attrs):
        start, end = attrs.get("startDate"), attrs.get("endDate")
        if start and end and start > end:
            raise serializers.ValidationError("startDate must be before endDate")
        return attrs
