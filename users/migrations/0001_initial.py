"""
Initial migration for the users app.

Defines the `UserProfile` model.  Every user gets a profile through the
`post_save` signal in `users.signals`.
"""
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("location", models.JSONField(blank=True, null=True)),
                ("music_preferences", models.JSONField(blank=True, default=list, help_text="List of genre tags")),
                ("max_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("profile_image_url", models.URLField(blank=True, default="", max_length=500)),
                ("is_email_verified", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
    ]
