"""
Feed, post, like and comment tests for `/api/social/posts...`.
"""
import pytest

from django.db.models.query import QuerySet

from social.models import Friendship, SocialComment, SocialLike, SocialPost


@pytest.fixture
def friends(user, bob):
    return Friendship.objects.create(requester=user, addressee=bob, status=Friendship.ACCEPTED)


def create_post(client, content, **extra):
    payload = {"content": content, **extra}
    return client.post("/api/social/posts", payload, content_type="application/json")


@pytest.mark.django_db
def test_feed_shows_own_and_friends_posts_newest_first(auth_client, bob_client, carol_client, friends):
    create_post(auth_client, "mine")
    create_post(bob_client, "from bob")
    create_post(carol_client, "stranger")

    body = auth_client.get("/api/social/posts").json()

    assert [p["content"] for p in body["data"]["posts"]] == ["from bob", "mine"]
    assert body["data"]["pagination"] == {"page": 0, "limit": 20}


@pytest.mark.django_db
def test_feed_pagination(auth_client, user):
    for i in range(3):
        SocialPost.objects.create(author=user, content=f"post {i}")

    body = auth_client.get("/api/social/posts?page=1&limit=2").json()

    assert [p["content"] for p in body["data"]["posts"]] == ["post 0"]
    assert body["data"]["pagination"] == {"page": 1, "limit": 2}


@pytest.mark.django_db
def test_create_post_with_event(auth_client, user, event):
    resp = create_post(auth_client, "  see you there  ", eventId=event.id)

    assert resp.status_code == 201
    post = resp.json()["data"]["post"]
    assert post["content"] == "see you there"
    assert post["author"]["id"] == user.id
    assert post["event"]["title"] == "Rock Night"
    assert post["likes"] == 0
    assert post["comments"] == 0
    assert post["isLiked"] is False


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload, status_code, message",
    [
        ({"content": "   "}, 400, "Post content is required"),
        ({"content": "x" * 1001}, 400, "Post content cannot exceed 1000 characters"),
        ({"content": "hi", "eventId": 99999}, 404, "Event not found"),
    ],
)
def test_create_post_validation(auth_client, payload, status_code, message):
    resp = auth_client.post("/api/social/posts", payload, content_type="application/json")
    assert resp.status_code == status_code
    assert resp.json()["message"] == message
    assert not SocialPost.objects.exists()


@pytest.mark.django_db
def test_like_toggle(auth_client, bob_client, friends, bob):
    post_id = create_post(bob_client, "like me").json()["data"]["post"]["id"]

    liked = auth_client.post(f"/api/social/posts/{post_id}/like")
    assert liked.json()["data"] == {"liked": True}
    assert liked.json()["message"] == "Post liked"
    post = auth_client.get("/api/social/posts").json()["data"]["posts"][0]
    assert (post["likes"], post["isLiked"]) == (1, True)

    unliked = auth_client.post(f"/api/social/posts/{post_id}/like")
    assert unliked.json()["data"] == {"liked": False}
    assert unliked.json()["message"] == "Post unliked"
    post = auth_client.get("/api/social/posts").json()["data"]["posts"][0]
    assert (post["likes"], post["isLiked"]) == (0, False)


@pytest.mark.django_db
def test_like_missing_post(auth_client):
    resp = auth_client.post("/api/social/posts/99999/like")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Post not found"


@pytest.mark.django_db
def test_friend_can_comment_and_counts_update(auth_client, bob_client, friends, user):
    post_id = create_post(auth_client, "who is going?").json()["data"]["post"]["id"]

    resp = bob_client.post(
        f"/api/social/posts/{post_id}/comments", {"content": "me!"}, content_type="application/json"
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["comment"]["content"] == "me!"
    assert resp.json()["data"]["comment"]["postId"] == post_id

    comments = auth_client.get(f"/api/social/posts/{post_id}/comments").json()["data"]["comments"]
    assert [c["content"] for c in comments] == ["me!"]
    post = auth_client.get("/api/social/posts").json()["data"]["posts"][0]
    assert post["comments"] == 1


@pytest.mark.django_db
def test_non_friend_cannot_comment_or_read_comments(auth_client, carol_client):
    post_id = create_post(auth_client, "friends only").json()["data"]["post"]["id"]

    write = carol_client.post(
        f"/api/social/posts/{post_id}/comments", {"content": "hello"}, content_type="application/json"
    )
    read = carol_client.get(f"/api/social/posts/{post_id}/comments")

    assert write.status_code == 403
    assert write.json()["message"] == "You can only view and comment on posts from your friends"
    assert read.status_code == 403
    assert not SocialComment.objects.exists()


@pytest.mark.django_db
def test_empty_comment_rejected(auth_client):
    post_id = create_post(auth_client, "hi").json()["data"]["post"]["id"]
    resp = auth_client.post(f"/api/social/posts/{post_id}/comments", {"content": ""}, content_type="application/json")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Comment content is required"


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload, field",
    [
        ({"content": "hi", "imageUrl": "not a url"}, "imageUrl"),
        ({"content": "hi", "eventId": "abc"}, "eventId"),
        ({"content": ["hi"]}, "content"),
    ],
)
def test_create_post_rejects_malformed_fields(auth_client, payload, field):
    resp = auth_client.post("/api/social/posts", payload, content_type="application/json")
    assert resp.status_code == 400
    assert resp.json()["message"].startswith(f"{field}: ")
    assert not SocialPost.objects.exists()


@pytest.mark.django_db
def test_create_post_with_image(auth_client):
    resp = create_post(auth_client, "poster", imageUrl="https://img.example/poster.jpg")
    assert resp.status_code == 201
    assert resp.json()["data"]["post"]["imageUrl"] == "https://img.example/poster.jpg"


@pytest.mark.django_db
def test_concurrent_like_keeps_one_row(auth_client, monkeypatch, user):
    post = SocialPost.objects.create(author=user, content="race")
    # another request liked the post after this one found nothing to unlike
    SocialLike.objects.create(post=post, user=user)
    monkeypatch.setattr(QuerySet, "delete", lambda self: (0, {}))

    resp = auth_client.post(f"/api/social/posts/{post.id}/like")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"liked": True}
    assert SocialLike.objects.filter(post=post, user=user).count() == 1


@pytest.mark.django_db
def test_feed_rejects_out_of_range_page(auth_client):
    resp = auth_client.get("/api/social/posts?page=99999999999999999999")
    assert resp.status_code == 400
    assert resp.json()["message"] == "page must be at most 100000"


@pytest.mark.django_db
def test_comment_rejects_non_string_content(auth_client):
    post_id = create_post(auth_client, "hi").json()["data"]["post"]["id"]
    resp = auth_client.post(
        f"/api/social/posts/{post_id}/comments", {"content": {"text": "x"}}, content_type="application/json"
    )
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("content: ")
