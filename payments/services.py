"""
Payment domain operations.

Stripe failures never leak raw: connection problems and timeouts raise
``VendorUnavailable`` (502); every other Stripe error becomes a
``ValidationError`` prefixed with ``"Payment error: "``.  Both the confirm
path and the webhook keep the invariant that a succeeded payment has a
``purchased`` interaction for its user and event.
"""
import logging
from contextlib import contextmanager

import stripe
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from common.exceptions import ResourceNotFound, VendorUnavailable
from events.models import Event, UserEvent
from events.services import record_purchase

from . import stripe_gateway
from .models import Payment

logger = logging.getLogger(__name__)

SUCCEEDED_EVENT = "payment_intent.succeeded"
FAILED_EVENT = "payment_intent.payment_failed"


@contextmanager
def _stripe_errors():
    try:
        yield
    except (stripe.APIConnectionError, stripe.RateLimitError) as exc:
        logger.error("Stripe unavailable: %s", exc)
        raise VendorUnavailable("Payment provider is unavailable, please retry.") from exc
    except stripe.StripeError as exc:
        logger.error("Stripe error: %s", exc)
        message = getattr(exc, "user_message", None) or str(exc)
        raise ValidationError(f"Payment error: {message}") from exc


def _purchase_data(payment) -> dict:
    return {
        "paymentId": payment.id,
        "amount": payment.amount,
        "currency": payment.currency,
        "purchaseDate": timezone.now().isoformat(),
    }


def _owned_payment(user, payment_id: int) -> Payment:
    payment = Payment.objects.select_related("event").filter(pk=payment_id).first()
    if payment is None:
        raise ResourceNotFound("Payment")
    if payment.user_id != user.id:
        raise ValidationError("Unauthorized to access this payment")
    return payment


def create_intent(user, event_id: int, amount: int, currency: str = "usd", description=None):
    """
    Create a Stripe PaymentIntent and its pending local record; returns
    ``(payment, client_secret)``.  Input is validated by ``CreateIntentSerializer``.
    """
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        raise ResourceNotFound("Event")

    description = description or f"Ticket for {event.title}"[:500]

    with _stripe_errors():
        intent = stripe_gateway.create_intent(
            amount=amount,
            currency=currency,
            description=description,
            metadata={"userId": str(user.id), "eventId": str(event.id), "eventTitle": event.title or ""},
        )

    payment = Payment.objects.create(
        user=user,
        event=event,
        stripe_payment_id=intent.id,
        amount=amount,
        currency=currency,
        status=Payment.STATUS_PENDING,
        description=description,
        metadata={
            "eventTitle": event.title,
            "venueName": event.venue_name,
            "eventDate": event.event_date.isoformat() if event.event_date else None,
        },
    )
    logger.info("Payment intent created for user %s, event %s", user.email, event.title)
    return payment, intent.client_secret


def confirm(user, payment_id):
    """Refresh the payment from Stripe; returns ``(payment, stripe_status)``."""
    payment = _owned_payment(user, payment_id)

    with _stripe_errors():
        intent = stripe_gateway.retrieve_intent(payment.stripe_payment_id)

    previous = payment.status
    new_status = stripe_gateway.map_intent_status(intent.status)
    with transaction.atomic():
        payment.status = new_status
        payment.save(update_fields=["status", "updated_at"])
        if new_status == Payment.STATUS_SUCCEEDED and payment.event_id:
            already_recorded = UserEvent.objects.filter(
                user_id=payment.user_id, event_id=payment.event_id, interaction_type=UserEvent.PURCHASED
            ).exists()
            if previous != Payment.STATUS_SUCCEEDED or not already_recorded:
                record_purchase(payment.user_id, payment.event_id, _purchase_data(payment))
                logger.info("Payment confirmed for user %s, event %s", user.email, payment.event_id)
    return payment, intent.status


def handle_webhook(payload: bytes, signature: str) -> str:
    """
    Apply a verified Stripe webhook to the matching local payments.

    Raises ``WebhookSignatureError`` when the payload is not authentic.
    Returns the Stripe event type.
    """
    event = stripe_gateway.construct_webhook_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
    event_type = event.get("type")
    intent = (event.get("data") or {}).get("object") or {}
    intent_id = intent.get("id")

    if event_type == SUCCEEDED_EVENT and intent_id:
        with transaction.atomic():
            for payment in Payment.objects.select_for_update().filter(stripe_payment_id=intent_id):
                payment.status = Payment.STATUS_SUCCEEDED
                payment.save(update_fields=["status", "updated_at"])
                if payment.event_id:
                    record_purchase(payment.user_id, payment.event_id, _purchase_data(payment))
        logger.info("Payment succeeded: %s", intent_id)
    elif event_type == FAILED_EVENT and intent_id:
        Payment.objects.filter(stripe_payment_id=intent_id).update(
            status=Payment.STATUS_FAILED, updated_at=timezone.now()
        )
        logger.info("Payment failed: %s", intent_id)
    else:
        logger.info("Unhandled event type: %s", event_type)
    return event_type


def history(user, page: int, limit: int) -> list:
    offset = page * limit
    payments = Payment.objects.filter(user=user).select_related("event").order_by("-created_at", "-id")
    return list(payments[offset:offset + limit])


def get_payment(user, payment_id) -> Payment:
    return _owned_payment(user, payment_id)
