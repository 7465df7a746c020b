"""
Views for the users app.

Authentication endpoints (register, login, me, change-password, logout) are
mounted under ``/api/auth/``; the user directory (search, public profile and
a user's friends) is a read-only viewset mounted under ``/api/users``.
"""
import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone
from rest_framework import exceptions, mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.views import APIView

from common.exceptions import ResourceNotFound
from common.pagination import parse_int
from common.responses import success
from social.services import list_friends

from .authentication import issue_token
from .serializers import (
    AccountSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    PublicUserSerializer,
    RegisterSerializer,
    UserSearchResultSerializer,
    UserSummarySerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = RegisterSerializer

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("New user registered: %s", user.email)
        return success(
            {"user": AccountSerializer(user).data, "token": issue_token(user)},
            message="User registered successfully",
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Exchange email + password for a signed access token."""

    permission_classes = [permissions.AllowAny]
    serializer_class = LoginSerializer

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"].strip().lower()

        user = User.objects.filter(username=email).select_related("profile").first()
        if user is None or not user.is_active or not user.check_password(serializer.validated_data["password"]):
            raise exceptions.AuthenticationFailed("Invalid email or password")

        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        logger.info("User logged in: %s", email)
        return success(
            {"user": AccountSerializer(user).data, "token": issue_token(user)},
            message="Login successful",
        )


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProfileUpdateSerializer

    def get(self, request):
        return success({"user": AccountSerializer(request.user).data})

    def patch(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return success({"user": AccountSerializer(user).data}, message="Profile updated successfully")


class ChangePasswordView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ChangePasswordSerializer

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not user.check_password(serializer.validated_data["currentPassword"]):
            raise exceptions.AuthenticationFailed("Current password is incorrect")

        user.set_password(serializer.validated_data["newPassword"])
        user.save(update_fields=["password"])
        logger.info("Password changed for user: %s", user.email)
        return success(message="Password changed successfully")


class LogoutView(APIView):
    """Tokens are stateless; logout is acknowledged and logged only."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        logger.info("User logged out: %s", request.user.email)
        return success(message="Logged out successfully")


class UserViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Read-only user directory.

    ``list`` searches other users by name or email and requires a caller;
    ``retrieve`` and ``friends`` are public profile views.
    """

    queryset = User.objects.filter(is_active=True).select_related("profile").order_by("id")
    serializer_class = PublicUserSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "list":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get_object(self):
        user = self.get_queryset().filter(pk=self.kwargs["pk"]).first()
        if user is None:
            raise ResourceNotFound("User")
        return user

    def list(self, request):
        q = (request.query_params.get("q") or "").strip()
        if not q:
            raise exceptions.ValidationError("Search query is required")
        limit = max(1, min(parse_int(request.query_params.get("limit"), "limit", 20), 50))

        users = (
            self.get_queryset()
            .exclude(pk=request.user.pk)
            .filter(Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(email__icontains=q))[:limit]
        )
        return success({"users": UserSearchResultSerializer(users, many=True).data})

    def retrieve(self, request, pk=None):
        return success({"user": PublicUserSerializer(self.get_object()).data})

    @action(detail=True, methods=["get"])
    def friends(self, request, pk=None):
        user = self.get_object()
        return success({"friends": UserSummarySerializer(list_friends(user), many=True).data})
