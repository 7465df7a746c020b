"""
Initial migration for the events app.

Creates the cached `Event` table keyed by the vendor's external id and the
`UserEvent` interaction table with its unique (user, event, type) constraint.
"""
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("external_id", models.CharField(blank=True, max_length=128, null=True, unique=True)),
                ("title", models.CharField(max_length=500)),
                ("description", models.TextField(blank=True, null=True)),
                ("artist_name", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_name", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_address", models.JSONField(blank=True, null=True)),
                ("event_date", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("ticket_url", models.URLField(blank=True, max_length=1000, null=True)),
                ("image_url", models.URLField(blank=True, max_length=1000, null=True)),
                ("genre", models.CharField(blank=True, max_length=100, null=True)),
                ("price_range", models.JSONField(blank=True, null=True)),
                (
                    "external_source",
                    models.CharField(
                        choices=[("ticketmaster", "Ticketmaster"), ("manual", "Manual")],
                        default="ticketmaster",
                        max_length=32,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="UserEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "interaction_type",
                    models.CharField(
                        choices=[("interested", "Interested"), ("going", "Going"), ("purchased", "Purchased")],
                        max_length=16,
                    ),
                ),
                ("purchase_data", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="user_events",
                        to="events.event",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="event_interactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["user", "-created_at"], name="userevent_user_recent_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "event", "interaction_type"), name="uniq_user_event_interaction"
                    )
                ],
            },
        ),
    ]
