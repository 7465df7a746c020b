"""
Database models for the payments app.

A `Payment` is the local record of a Stripe PaymentIntent created for an
event ticket.  Amounts are integers in the currency's smallest unit.  The
status is refreshed by the confirm endpoint or by the Stripe webhook; a
succeeded payment always has a matching ``purchased`` `events.UserEvent`.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models


class Payment(models.Model):
    STATUS_PENDING = "pending"
    STATUS_SUCCEEDED = "succeeded"
    STATUS_FAILED = "failed"
    STATUS_CANCELED = "canceled"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_SUCCEEDED, "Succeeded"),
        (STATUS_FAILED, "Failed"),
        (STATUS_CANCELED, "Canceled"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.SET_NULL,
        related_name="payments",
        null=True,
        blank=True,
    )
    stripe_payment_id = models.CharField(max_length=255, unique=True)
    amount = models.PositiveIntegerField(help_text="Amount in the currency's smallest unit")
    currency = models.CharField(max_length=10, default="usd")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    description = models.CharField(max_length=500, blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "-created_at"], name="payment_user_recent_idx"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"Payment {self.pk} {self.stripe_payment_id} ({self.status})"
