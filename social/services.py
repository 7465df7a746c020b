"""
Social domain operations: friend requests, friends, posts, comments, likes.

Friend request lifecycle::

    pending --accept--> accepted
    pending --decline--> (row deleted)
    pending --block--> blocked

A pair of users holds at most one friendship row, whichever direction it was
requested in; ``send_friend_request`` checks both orders before inserting.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Exists, OuterRef, Q
from rest_framework.exceptions import PermissionDenied, ValidationError

from common.exceptions import ResourceNotFound
from events.models import Event

from .models import Friendship, SocialComment, SocialLike, SocialPost

logger = logging.getLogger(__name__)

User = get_user_model()

RESPONSE_ACTIONS = {
    "accept": Friendship.ACCEPTED,
    "decline": None,
    "block": Friendship.BLOCKED,
}
MAX_CONTENT_LENGTH = 1000


def _between(a_id, b_id) -> Q:
    return Q(requester_id=a_id, addressee_id=b_id) | Q(requester_id=b_id, addressee_id=a_id)


def _accepted_with(user_id):
    return Friendship.objects.filter(
        Q(requester_id=user_id) | Q(addressee_id=user_id), status=Friendship.ACCEPTED
    )


# ---------- friends ----------

def send_friend_request(requester, addressee_id: int) -> Friendship:
    if addressee_id == requester.id:
        raise ValidationError("Cannot send friend request to yourself")

    addressee = User.objects.filter(pk=addressee_id, is_active=True).first()
    if addressee is None:
        raise ResourceNotFound("User")

    duplicate = "Friendship request already exists or users are already friends"
    if Friendship.objects.filter(_between(requester.id, addressee_id)).exists():
        raise ValidationError(duplicate)

    try:
        with transaction.atomic():
            friendship = Friendship.objects.create(
                requester=requester, addressee=addressee, status=Friendship.PENDING
            )
    except IntegrityError:
        # a concurrent request for the same pair won the insert
        raise ValidationError(duplicate)

    logger.info("Friend request sent from %s to user %s", requester.email, addressee_id)
    return friendship


def respond_to_friend_request(responder, request_id, action):
    """Apply ``action`` to a pending request; returns the row, or ``None`` once declined."""
    if action not in RESPONSE_ACTIONS:
        raise ValidationError("Invalid action. Must be: accept, decline, or block")

    friendship = (
        Friendship.objects.select_related("requester__profile", "addressee__profile")
        .filter(pk=request_id)
        .first()
    )
    if friendship is None:
        raise ResourceNotFound("Friend request")
    if friendship.addressee_id != responder.id:
        raise PermissionDenied("You can only respond to friend requests sent to you")
    if friendship.status != Friendship.PENDING:
        raise ValidationError("Friend request is no longer pending")

    logger.info("Friend request %s %s by %s", friendship.pk, action, responder.email)
    if action == "decline":
        friendship.delete()
        return None

    friendship.status = RESPONSE_ACTIONS[action]
    friendship.save(update_fields=["status", "updated_at"])
    return friendship


def list_friend_requests(user):
    return list(
        Friendship.objects.filter(addressee=user, status=Friendship.PENDING)
        .select_related("requester__profile")
        .order_by("-created_at", "-id")
    )


def friend_ids(user_id) -> set:
    ids = set()
    for requester_id, addressee_id in _accepted_with(user_id).values_list("requester_id", "addressee_id"):
        ids.add(addressee_id if requester_id == user_id else requester_id)
    return ids


def list_friends(user) -> list:
    """The other party of every accepted friendship ``user`` belongs to."""
    rows = _accepted_with(user.id).select_related("requester__profile", "addressee__profile").order_by("-updated_at")
    return [row.other_party(user.id) for row in rows]


def remove_friend(user, other_id: int) -> None:
    deleted, _ = Friendship.objects.filter(_between(user.id, other_id), status=Friendship.ACCEPTED).delete()
    if not deleted:
        raise ResourceNotFound("Friendship")
    logger.info("Friendship removed between %s and user %s", user.email, other_id)


# ---------- posts ----------

def _clean_content(content, label="Post") -> str:
    content = content.strip() if isinstance(content, str) else ""
    if not content:
        raise ValidationError(f"{label} content is required")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(f"{label} content cannot exceed {MAX_CONTENT_LENGTH} characters")
    return content


def _posts_for(user):
    return (
        SocialPost.objects.select_related("author__profile", "event")
        .annotate(
            like_count=Count("likes", distinct=True),
            comment_count=Count("comments", distinct=True),
            is_liked=Exists(SocialLike.objects.filter(post=OuterRef("pk"), user=user)),
        )
        .order_by("-created_at", "-id")
    )


def create_post(author, content, event_id=None, image_url=None) -> SocialPost:
    content = _clean_content(content)

    event = None
    if event_id is not None:
        event = Event.objects.filter(pk=event_id).first()
        if event is None:
            raise ResourceNotFound("Event")

    post = SocialPost.objects.create(author=author, content=content, event=event, image_url=image_url or None)
    logger.info("Post %s created by %s", post.pk, author.email)
    return _posts_for(author).get(pk=post.pk)


def feed(user, page: int, limit: int) -> list:
    """Posts by the caller and accepted friends, newest first."""
    authors = friend_ids(user.id) | {user.id}
    offset = page * limit
    return list(_posts_for(user).filter(author_id__in=authors)[offset:offset + limit])


def _get_post(post_id) -> SocialPost:
    post = SocialPost.objects.filter(pk=post_id).first()
    if post is None:
        raise ResourceNotFound("Post")
    return post


def toggle_like(user, post_id) -> bool:
    """Flip the caller's like on a post; returns the new liked state."""
    post = _get_post(post_id)
    deleted, _ = SocialLike.objects.filter(post=post, user=user).delete()
    if deleted:
        return False
    SocialLike.objects.get_or_create(post=post, user=user)
    return True


# ---------- comments ----------

def _visible_post(user, post_id) -> SocialPost:
    post = _get_post(post_id)
    if post.author_id != user.id and post.author_id not in friend_ids(user.id):
        raise PermissionDenied("You can only view and comment on posts from your friends")
    return post


def add_comment(author, post_id, content) -> SocialComment:
    post = _visible_post(author, post_id)
    comment = SocialComment.objects.create(post=post, author=author, content=_clean_content(content, "Comment"))
    logger.info("Comment %s added to post %s by %s", comment.pk, post.pk, author.email)
    return comment


def list_comments(user, post_id) -> list:
    post = _visible_post(user, post_id)
    return list(post.comments.select_related("author__profile"))
