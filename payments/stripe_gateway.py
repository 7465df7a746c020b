"""
Stripe access for the payments app.

All calls to Stripe go through this module so the rest of the app (and the
tests) deal with a small surface:

* ``create_intent`` - creates a PaymentIntent.  Never retried.
* ``retrieve_intent`` - fetches a PaymentIntent, retrying a bounded number
  of times on connection errors only.
* ``construct_webhook_event`` - verifies a webhook signature and parses the
  payload.  No network access.
* ``map_intent_status`` - Stripe intent status to local payment status.
"""
from __future__ import annotations

import json
import logging
import time

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)

RETRIEVE_ATTEMPTS = 3
RETRY_BACKOFF_SECONDS = 0.3

_STATUS_MAP = {
    "succeeded": "succeeded",
    "canceled": "canceled",
    "requires_payment_method": "failed",
}

_http_client = None


class WebhookSignatureError(Exception):
    """The webhook payload could not be authenticated or parsed."""


def _configure():
    global _http_client
    stripe.api_key = settings.STRIPE_SECRET_KEY
    if _http_client is None:
        _http_client = stripe.RequestsClient(timeout=settings.STRIPE_TIMEOUT)
        stripe.default_http_client = _http_client


def create_intent(*, amount: int, currency: str, description: str, metadata: dict):
    _configure()
    return stripe.PaymentIntent.create(
        amount=amount,
        currency=currency,
        description=description,
        metadata=metadata,
    )


def retrieve_intent(intent_id: str):
    _configure()
    for attempt in range(1, RETRIEVE_ATTEMPTS + 1):
        try:
            return stripe.PaymentIntent.retrieve(intent_id)
        except stripe.APIConnectionError:
            if attempt == RETRIEVE_ATTEMPTS:
                raise
            logger.warning("Stripe connection error retrieving %s, attempt %s", intent_id, attempt)
            time.sleep(RETRY_BACKOFF_SECONDS * attempt)


def construct_webhook_event(payload, signature: str, secret: str) -> dict:
    """Verify ``signature`` over the raw ``payload`` and return the parsed event."""
    if not secret:
        raise WebhookSignatureError("Webhook secret not configured")
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            payload, signature or "", secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
        )
        event = json.loads(payload)
    except stripe.SignatureVerificationError as exc:
        raise WebhookSignatureError(str(exc)) from exc
    except ValueError as exc:
        raise WebhookSignatureError("Invalid payload") from exc
    if not isinstance(event, dict) or "type" not in event:
        raise WebhookSignatureError("Invalid payload")
    return event


def map_intent_status(intent_status: str) -> str:
    return _STATUS_MAP.get(intent_status, "pending")
