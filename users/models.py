"""
Models for the users app.

A `UserProfile` extends the built-in `auth.User` with the concert-going
attributes of an account: home location, music preference tags and the
maximum ticket price the user is willing to pay.  The `User.username` is
always the normalized (lowercased) email address, which keeps email
addresses unique.  Profiles are created automatically via signals.
"""
from django.contrib.auth.models import User
from django.db import models


class UserProfile(models.Model):
    """Extension of Django's built-in User model."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    date_of_birth = models.DateField(null=True, blank=True)
    # {"city": "...", "state": "..."}
    location = models.JSONField(null=True, blank=True)
    music_preferences = models.JSONField(default=list, blank=True, help_text="List of genre tags")
    max_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    profile_image_url = models.URLField(max_length=500, blank=True, default="")
    is_email_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Profile for {self.user.username}"

    @property
    def city(self):
        return (self.location or {}).get("city") or None

    @property
    def state(self):
        return (self.location or {}).get("state") or None
