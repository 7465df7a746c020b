"""
Authentication endpoints for the users app, mounted under ``/api/auth/``.

Login is via email + password only and returns a signed access token.
"""
from django.urls import path

from .views import ChangePasswordView, LoginView, LogoutView, MeView, RegisterView

urlpatterns = [
    path("register", RegisterView.as_view(), name="register"),
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("me", MeView.as_view(), name="me"),
    path("change-password", ChangePasswordView.as_view(), name="password_change"),
]
