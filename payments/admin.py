"""
Django admin registration for the payments app.

Provides list displays and filters for Payment records to facilitate
reconciliation with Stripe by administrators.
"""
from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "event",
        "status",
        "amount",
        "currency",
        "created_at",
    )
    list_filter = ("status", "currency")
    search_fields = ("user__username", "stripe_payment_id")
    ordering = ("-created_at",)
