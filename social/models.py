"""
Models for the social app.

A `Friendship` is a directed request edge ``requester -> addressee`` whose
status moves from ``pending`` to ``accepted`` or ``blocked`` (a declined
request is deleted).  Friend lists treat the user as either endpoint.
Posts, comments and likes make up the feed.
"""
from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Friendship(models.Model):
    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (ACCEPTED, "Accepted"),
        (BLOCKED, "Blocked"),
    ]

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="friend_requests_sent",
        on_delete=models.CASCADE,
    )
    addressee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="friend_requests_received",
        on_delete=models.CASCADE,
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=~Q(requester=F("addressee")), name="friendship_no_self"
            ),
            models.UniqueConstraint(
                fields=["requester", "addressee"], name="uniq_friendship_pair"
            ),
        ]
        indexes = [
            models.Index(fields=["addressee", "status"], name="friendship_addressee_idx"),
            models.Index(fields=["requester", "status"], name="friendship_requester_idx"),
        ]

    def __str__(self):
        return f"Friendship({self.requester_id} -> {self.addressee_id}, {self.status})"

    def other_party(self, user_id):
        return self.addressee if self.requester_id == user_id else self.requester


class SocialPost(models.Model):
    author = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="social_posts", on_delete=models.CASCADE)
    event = models.ForeignKey(
        "events.Event", related_name="social_posts", on_delete=models.SET_NULL, null=True, blank=True
    )
    content = models.CharField(max_length=1000)
    image_url = models.URLField(max_length=1000, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Post {self.pk} by {self.author_id}"


class SocialComment(models.Model):
    post = models.ForeignKey(SocialPost, related_name="comments", on_delete=models.CASCADE)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="social_comments", on_delete=models.CASCADE)
    content = models.CharField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]


class SocialLike(models.Model):
    post = models.ForeignKey(SocialPost, related_name="likes", on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="social_likes", on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="uniq_post_like"),
        ]
