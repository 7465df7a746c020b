"""
Serializers for the social app.

Post payloads carry the author and event summaries plus ``likes`` and
``comments`` counts and the caller's ``isLiked`` flag, all read from the
annotations added in ``social.services``.
"""
from rest_framework import serializers

from events.serializers import EventSummarySerializer
from users.serializers import UserSummarySerializer

from .models import Friendship, SocialComment, SocialPost


class FriendshipSerializer(serializers.ModelSerializer):
    requester = UserSummarySerializer(read_only=True)
    addressee = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Friendship
        fields = ["id", "requester", "addressee", "status", "createdAt", "updatedAt"]


class FriendRequestSerializer(serializers.ModelSerializer):
    """Incoming request as seen by its addressee."""

    requester = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Friendship
        fields = ["id", "requester", "status", "createdAt"]


class SocialPostSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)
    event = EventSummarySerializer(read_only=True, allow_null=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True, allow_null=True)
    likes = serializers.IntegerField(source="like_count", read_only=True, default=0)
    comments = serializers.IntegerField(source="comment_count", read_only=True, default=0)
    isLiked = serializers.BooleanField(source="is_liked", read_only=True, default=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SocialPost
        fields = [
            "id", "author", "content", "imageUrl", "event", "likes", "comments", "isLiked",
            "createdAt", "updatedAt",
        ]


class SocialCommentSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)
    postId = serializers.IntegerField(source="post_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = SocialComment
        fields = ["id", "postId", "author", "content", "createdAt"]


class FriendRequestCreateSerializer(serializers.Serializer):
    userId = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs.get("userId") is None:
            raise serializers.ValidationError("User ID is required")
        return attrs


class FriendRequestActionSerializer(serializers.Serializer):
    ACTION_MESSAGE = "Invalid action. Must be: accept, decline, or block"

    action = serializers.ChoiceField(
        choices=["accept", "decline", "block"],
        error_messages={"required": ACTION_MESSAGE, "null": ACTION_MESSAGE, "invalid_choice": ACTION_MESSAGE},
    )


class PostCreateSerializer(serializers.Serializer):
    """
    Type checks only; ``social.services`` trims the content and applies the
    required and length rules shared with comments.
    """

    content = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    eventId = serializers.IntegerField(required=False, allow_null=True)
    imageUrl = serializers.URLField(required=False, allow_null=True, allow_blank=True, max_length=1000)


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
