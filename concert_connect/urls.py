"""
URL configuration for the Concert Connect backend.

All API endpoints live under the `/api/` prefix.  Authentication endpoints
are nested under `/api/auth/`; the read-only user directory is registered
on DRF's router.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.routers import SimpleRouter

from concert_connect.views import health
from users.views import UserViewSet

router = SimpleRouter(trailing_slash=False)
router.register(r"users", UserViewSet, basename="user")

urlpatterns = [
    path("health", health, name="health"),
    path("admin/", admin.site.urls),

    # Swagger
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    path("api/auth/", include("users.urls")),
    path("api/", include(router.urls)),
    path("api/", include("events.urls")),
    path("api/social/", include("social.urls")),
    path("api/payments/", include("payments.urls")),
]
