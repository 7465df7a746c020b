"""
URL configuration for the payments app.

Include this module under ``/api/payments/`` in the project-level URL
config.  The webhook endpoint is called by Stripe.
"""
from django.urls import path

from .views import (
    ConfirmPaymentView,
    CreateIntentView,
    PaymentDetailView,
    PaymentHistoryView,
    StripeWebhookView,
)

urlpatterns = [
    path("create-intent", CreateIntentView.as_view(), name="payment-create-intent"),
    path("confirm/<int:payment_id>", ConfirmPaymentView.as_view(), name="payment-confirm"),
    path("history", PaymentHistoryView.as_view(), name="payment-history"),
    path("webhook", StripeWebhookView.as_view(), name="stripe-webhook"),
    path("<int:pk>", PaymentDetailView.as_view(), name="payment-detail"),
]
