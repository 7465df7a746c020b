"""
Social endpoints, mounted under ``/api/social/``.
"""
from django.urls import path

from .views import (
    FriendDetailView,
    FriendListView,
    FriendRequestCreateView,
    FriendRequestListView,
    FriendRequestRespondView,
    PostCommentView,
    PostLikeView,
    PostListCreateView,
)

urlpatterns = [
    path("friends/request", FriendRequestCreateView.as_view(), name="friend-request-create"),
    path("friends/request/<int:pk>", FriendRequestRespondView.as_view(), name="friend-request-respond"),
    path("friends/requests", FriendRequestListView.as_view(), name="friend-request-list"),
    path("friends", FriendListView.as_view(), name="friend-list"),
    path("friends/<int:user_id>", FriendDetailView.as_view(), name="friend-detail"),
    path("posts", PostListCreateView.as_view(), name="post-list"),
    path("posts/<int:pk>/like", PostLikeView.as_view(), name="post-like"),
    path("posts/<int:pk>/comments", PostCommentView.as_view(), name="post-comments"),
]
