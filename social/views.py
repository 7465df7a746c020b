"""
Views for the social app: friend requests, friends, feed, likes, comments.

Every endpoint requires an authenticated caller (the project default).
"""
import logging

from rest_framework import status
from rest_framework.views import APIView

from common.pagination import page_params
from common.responses import success
from users.serializers import UserSummarySerializer

from . import services
from .serializers import (
    CommentCreateSerializer,
    FriendRequestActionSerializer,
    FriendRequestCreateSerializer,
    FriendRequestSerializer,
    FriendshipSerializer,
    PostCreateSerializer,
    SocialCommentSerializer,
    SocialPostSerializer,
)

logger = logging.getLogger(__name__)


class FriendRequestCreateView(APIView):
    def post(self, request):
        serializer = FriendRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        friendship = services.send_friend_request(request.user, serializer.validated_data["userId"])
        return success(
            {"friendship": FriendshipSerializer(friendship).data},
            message="Friend request sent successfully",
            status=status.HTTP_201_CREATED,
        )


class FriendRequestRespondView(APIView):
    def patch(self, request, pk):
        serializer = FriendRequestActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action = serializer.validated_data["action"]
        friendship = services.respond_to_friend_request(request.user, pk, action)
        if friendship is None:
            return success(message="Friend request declined")
        return success(
            {"friendship": FriendshipSerializer(friendship).data},
            message=f"Friend request {action}ed successfully",
        )


class FriendRequestListView(APIView):
    def get(self, request):
        requests_ = services.list_friend_requests(request.user)
        return success({"requests": FriendRequestSerializer(requests_, many=True).data})


class FriendListView(APIView):
    def get(self, request):
        friends = services.list_friends(request.user)
        return success({"friends": UserSummarySerializer(friends, many=True).data})


class FriendDetailView(APIView):
    def delete(self, request, user_id):
        services.remove_friend(request.user, user_id)
        return success(message="Friend removed successfully")


class PostListCreateView(APIView):
    def get(self, request):
        page, limit = page_params(request)
        posts = services.feed(request.user, page, limit)
        return success({
            "posts": SocialPostSerializer(posts, many=True).data,
            "pagination": {"page": page, "limit": limit},
        })

    def post(self, request):
        serializer = PostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        post = services.create_post(
            request.user,
            data.get("content"),
            event_id=data.get("eventId"),
            image_url=data.get("imageUrl"),
        )
        return success(
            {"post": SocialPostSerializer(post).data},
            message="Post created successfully",
            status=status.HTTP_201_CREATED,
        )


class PostLikeView(APIView):
    def post(self, request, pk):
        liked = services.toggle_like(request.user, pk)
        return success({"liked": liked}, message="Post liked" if liked else "Post unliked")


class PostCommentView(APIView):
    def get(self, request, pk):
        comments = services.list_comments(request.user, pk)
        return success({"comments": SocialCommentSerializer(comments, many=True).data})

    def post(self, request, pk):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = services.add_comment(request.user, pk, serializer.validated_data.get("content"))
        return success(
            {"comment": SocialCommentSerializer(comment).data},
            message="Comment added successfully",
            status=status.HTTP_201_CREATED,
        )
