"""
ViewSet for the events app.

Search, detail and featured listings work for anonymous callers and add
``userInteractions`` when a caller is identified.  Marking and unmarking
interest and the caller's own event list require authentication.
"""
import logging

from rest_framework import permissions, viewsets
from rest_framework.decorators import action

from common.pagination import parse_int
from common.responses import success

from . import services
from .serializers import (
    EventSearchQuerySerializer,
    EventSerializer,
    InteractionEventSerializer,
    UserEventSerializer,
)

logger = logging.getLogger(__name__)

PUBLIC_ACTIONS = {"search", "retrieve", "featured", "genres"}


class EventViewSet(viewsets.GenericViewSet):
    serializer_class = EventSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def _serialize(self, events):
        interactions = None
        if self.request.user.is_authenticated:
            interactions = services.interaction_map(self.request.user, [e.id for e in events])
        return EventSerializer(events, many=True, context={"interactions": interactions}).data

    @action(detail=False, methods=["get"])
    def search(self, request):
        query = EventSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        events, pagination = services.search_events(request.user, query.validated_data)
        return success({"events": self._serialize(events), "pagination": pagination})

    def retrieve(self, request, pk=None):
        event = services.get_event(pk)
        return success({"event": self._serialize([event])[0]})

    @action(detail=True, methods=["post"])
    def interest(self, request, pk=None):
        interaction_type = request.data.get("type")
        user_event = services.mark_interest(request.user, pk, interaction_type)
        return success(
            {"userEvent": UserEventSerializer(user_event).data},
            message=f"Successfully marked as {interaction_type}",
        )

    @action(detail=True, methods=["delete"], url_path=r"interest/(?P<interaction_type>[^/.]+)")
    def remove_interest(self, request, pk=None, interaction_type=None):
        services.remove_interest(request.user, pk, interaction_type)
        return success(message=f"Successfully removed {interaction_type} status")

    @action(detail=False, methods=["get"], url_path="user/my-events")
    def my_events(self, request):
        grouped, total = services.my_events(request.user, request.query_params.get("type") or None)
        events = {
            interaction_type: InteractionEventSerializer(rows, many=True).data
            for interaction_type, rows in grouped.items()
        }
        return success({"events": events, "total": total})

    @action(detail=False, methods=["get"], url_path="featured/upcoming")
    def featured(self, request):
        limit = parse_int(request.query_params.get("limit"), "limit", services.FEATURED_DEFAULT_LIMIT)
        return success({"events": self._serialize(services.featured_upcoming(limit))})

    @action(detail=False, methods=["get"], url_path="meta/genres")
    def genres(self, request):
        return success({"genres": services.available_genres()})
