"""
Views for the payments app.

Create-intent, confirm, history and detail require an authenticated
caller.  The Stripe webhook is unauthenticated and relies solely on
signature verification; an invalid signature is answered with 400.
"""
from __future__ import annotations

import logging

from rest_framework import permissions, status, views
from rest_framework.response import Response

from common.pagination import page_params
from common.responses import success

from . import services
from .serializers import CreateIntentSerializer, PaymentSerializer
from .stripe_gateway import WebhookSignatureError

logger = logging.getLogger(__name__)


class CreateIntentView(views.APIView):
    """Initiate a Stripe PaymentIntent for an event ticket."""

    def post(self, request):
        serializer = CreateIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        payment, client_secret = services.create_intent(
            request.user,
            data["eventId"],
            data["amount"],
            currency=data["currency"],
            description=data.get("description"),
        )
        return success(
            {
                "clientSecret": client_secret,
                "paymentId": payment.id,
                "amount": payment.amount,
                "currency": payment.currency,
            },
            status=status.HTTP_201_CREATED,
        )


class ConfirmPaymentView(views.APIView):
    def post(self, request, payment_id):
        payment, stripe_status = services.confirm(request.user, payment_id)
        return success({"payment": PaymentSerializer(payment).data, "stripeStatus": stripe_status})


class PaymentHistoryView(views.APIView):
    def get(self, request):
        page, limit = page_params(request)
        payments = services.history(request.user, page, limit)
        return success({"payments": PaymentSerializer(payments, many=True).data})


class PaymentDetailView(views.APIView):
    def get(self, request, pk):
        payment = services.get_payment(request.user, pk)
        return success({"payment": PaymentSerializer(payment).data})


class StripeWebhookView(views.APIView):
    """Handle incoming Stripe webhook events."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    throttle_classes = []

    def post(self, request):
        # raw bytes are needed for signature verification
        payload = request.body
        signature = request.META.get("HTTP_STRIPE_SIGNATURE", "")
        try:
            services.handle_webhook(payload, signature)
        except WebhookSignatureError as exc:
            logger.warning("Webhook signature verification failed: %s", exc)
            return Response(
                {"success": False, "message": f"Webhook Error: {exc}"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"received": True})
