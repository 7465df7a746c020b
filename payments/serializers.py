"""
Serializers for the payments app.

Payments are rendered camelCase with an embedded event summary.
"""
from django.conf import settings
from rest_framework import serializers

from events.serializers import EventSummarySerializer

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    eventId = serializers.IntegerField(source="event_id", read_only=True, allow_null=True)
    stripePaymentId = serializers.CharField(source="stripe_payment_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    event = EventSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Payment
        fields = [
            "id", "userId", "eventId", "stripePaymentId", "amount", "currency", "status",
            "description", "metadata", "event", "createdAt", "updatedAt",
        ]
        read_only_fields = fields


class CreateIntentSerializer(serializers.Serializer):
    """Input for starting a ticket payment; ``amount`` is in minor units."""

    eventId = serializers.IntegerField(required=False, allow_null=True)
    # Stripe's upper bound for a single charge
    amount = serializers.IntegerField(required=False, allow_null=True, max_value=99_999_999)
    currency = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=10)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)

    def validate_currency(self, value):
        return (value or "usd").strip().lower() or "usd"

    def validate(self, attrs):
        if attrs.get("eventId") is None or attrs.get("amount") is None:
            raise serializers.ValidationError("Event ID and amount are required")
        if attrs["amount"] < settings.STRIPE_MIN_AMOUNT:
            raise serializers.ValidationError(
                f"Amount must be at least {settings.STRIPE_MIN_AMOUNT} (smallest currency unit)"
            )
        attrs.setdefault("currency", "usd")
        return attrs
