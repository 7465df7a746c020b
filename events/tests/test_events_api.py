"""
API tests for the events endpoints.

The Ticketmaster client is replaced with a stub returning normalized
pages so these tests never reach the network.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from events.models import Event, UserEvent
from events.ticketmaster import GENRES, TicketmasterClient


def vendor_event(external_id, title, **overrides):
    row = {
        "external_id": external_id,
        "title": title,
        "description": None,
        "artist_name": "Artist",
        "venue_name": "Arena",
        "venue_address": {"city": "Austin", "stateCode": "TX"},
        "event_date": timezone.now() + timedelta(days=30),
        "ticket_url": "https://tm.example/e",
        "image_url": "https://img.example/e.jpg",
        "genre": "rock",
        "price_range": {"min": 10.0, "max": 20.0, "currency": "USD"},
        "external_source": "ticketmaster",
    }
    row.update(overrides)
    return row


@pytest.fixture
def vendor(monkeypatch):
    """Stub ``TicketmasterClient.search``; returns the recorded calls."""
    calls = []
    state = {"events": [vendor_event("E1", "Rock Night")]}

    def fake_search(self, **kwargs):
        calls.append(kwargs)
        return {
            "events": state["events"],
            "pagination": {"page": 0, "size": 20, "totalElements": len(state["events"]), "totalPages": 1},
        }

    monkeypatch.setattr(TicketmasterClient, "search", fake_search)
    return {"calls": calls, "state": state}


@pytest.mark.django_db
def test_search_caches_events_without_duplicates(client, vendor):
    first = client.get("/api/events/search?city=Austin")
    assert first.status_code == 200
    assert first.json()["data"]["pagination"]["totalElements"] == 1

    vendor["state"]["events"] = [vendor_event("E1", "Rock Night (moved)"), vendor_event("E2", "Jazz Brunch")]
    second = client.get("/api/events/search?city=Austin")

    assert second.status_code == 200
    titles = [e["title"] for e in second.json()["data"]["events"]]
    assert titles == ["Rock Night (moved)", "Jazz Brunch"]
    assert Event.objects.filter(external_id="E1").count() == 1
    assert Event.objects.get(external_id="E1").title == "Rock Night (moved)"
    assert Event.objects.count() == 2


@pytest.mark.django_db
def test_search_keeps_existing_description(client, vendor, event):
    event.description = "Hand written"
    event.save()

    client.get("/api/events/search")

    event.refresh_from_db()
    assert event.description == "Hand written"
    assert event.title == "Rock Night"


@pytest.mark.django_db
def test_search_anonymous_has_no_user_interactions(client, vendor):
    body = client.get("/api/events/search").json()
    assert "userInteractions" not in body["data"]["events"][0]


@pytest.mark.django_db
def test_search_includes_callers_interactions(auth_client, user, vendor, event):
    UserEvent.objects.create(user=user, event=event, interaction_type=UserEvent.GOING)

    body = auth_client.get("/api/events/search").json()

    assert body["data"]["events"][0]["id"] == event.id
    assert body["data"]["events"][0]["userInteractions"] == ["going"]


@pytest.mark.django_db
def test_search_defaults_to_profile_location(auth_client, user, vendor):
    user.profile.location = {"city": "Denver", "state": "CO"}
    user.profile.save()

    auth_client.get("/api/events/search")
    auth_client.get("/api/events/search?city=Boulder")

    assert vendor["calls"][0]["city"] == "Denver"
    assert vendor["calls"][0]["state_code"] == "CO"
    assert vendor["calls"][1]["city"] == "Boulder"
    assert vendor["calls"][1]["state_code"] is None


@pytest.mark.django_db
def test_search_rejects_inverted_date_range(client, vendor):
    resp = client.get("/api/events/search?startDate=2030-02-01&endDate=2030-01-01")
    assert resp.status_code == 400
    assert vendor["calls"] == []


@pytest.mark.django_db
def test_get_event(client, event):
    resp = client.get(f"/api/events/{event.id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["event"]["externalId"] == "E1"


@pytest.mark.django_db
def test_get_missing_event(client):
    resp = client.get("/api/events/9999")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Event not found"}


@pytest.mark.django_db
def test_mark_interest_is_idempotent(auth_client, user, event):
    url = f"/api/events/{event.id}/interest"
    first = auth_client.post(url, {"type": "going"}, content_type="application/json")
    assert first.status_code == 200
    assert first.json()["message"] == "Successfully marked as going"
    first_created = UserEvent.objects.get(user=user, event=event).created_at

    second = auth_client.post(url, {"type": "going"}, content_type="application/json")

    assert second.status_code == 200
    rows = UserEvent.objects.filter(user=user, event=event, interaction_type="going")
    assert rows.count() == 1
    assert rows.get().created_at >= first_created
    assert second.json()["data"]["userEvent"]["interactionType"] == "going"


@pytest.mark.django_db
def test_mark_interest_invalid_type(auth_client, event):
    resp = auth_client.post(f"/api/events/{event.id}/interest", {"type": "maybe"}, content_type="application/json")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid interaction type. Must be: interested, going, or purchased"


@pytest.mark.django_db
def test_mark_interest_missing_event(auth_client):
    resp = auth_client.post("/api/events/9999/interest", {"type": "going"}, content_type="application/json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_interest_requires_authentication(client, event):
    resp = client.post(f"/api/events/{event.id}/interest", {"type": "going"}, content_type="application/json")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Access token required"}


@pytest.mark.django_db
def test_my_events_follows_interest_changes(auth_client, event):
    auth_client.post(f"/api/events/{event.id}/interest", {"type": "going"}, content_type="application/json")

    body = auth_client.get("/api/events/user/my-events?type=going").json()
    assert body["data"]["total"] == 1
    assert [e["externalId"] for e in body["data"]["events"]["going"]] == ["E1"]
    assert "interactionDate" in body["data"]["events"]["going"][0]

    removed = auth_client.delete(f"/api/events/{event.id}/interest/going")
    assert removed.status_code == 200
    assert removed.json()["message"] == "Successfully removed going status"

    body = auth_client.get("/api/events/user/my-events?type=going").json()
    assert body["data"] == {"events": {"going": []}, "total": 0}


@pytest.mark.django_db
def test_my_events_groups_every_type(auth_client, user, event):
    other = Event.objects.create(external_id="E2", title="Jazz", event_date=timezone.now() + timedelta(days=3))
    UserEvent.objects.create(user=user, event=event, interaction_type="interested")
    UserEvent.objects.create(user=user, event=other, interaction_type="interested")
    UserEvent.objects.create(user=user, event=other, interaction_type="purchased")

    body = auth_client.get("/api/events/user/my-events").json()

    assert set(body["data"]["events"]) == {"interested", "going", "purchased"}
    assert len(body["data"]["events"]["interested"]) == 2
    assert body["data"]["events"]["going"] == []
    assert body["data"]["total"] == 3


@pytest.mark.django_db
def test_my_events_invalid_type(auth_client):
    assert auth_client.get("/api/events/user/my-events?type=bogus").status_code == 400


@pytest.mark.django_db
def test_remove_missing_interest(auth_client, event):
    resp = auth_client.delete(f"/api/events/{event.id}/interest/interested")
    assert resp.status_code == 404
    assert resp.json()["message"] == "User event interaction not found"


@pytest.mark.django_db
def test_featured_lists_upcoming_active_events(client):
    now = timezone.now()
    Event.objects.create(external_id="past", title="Past", event_date=now - timedelta(days=1))
    Event.objects.create(external_id="off", title="Off", event_date=now + timedelta(days=1), is_active=False)
    Event.objects.create(external_id="late", title="Later", event_date=now + timedelta(days=10))
    Event.objects.create(external_id="soon", title="Soon", event_date=now + timedelta(days=2))
    Event.objects.create(external_id="nodate", title="Undated")

    body = client.get("/api/events/featured/upcoming").json()
    assert [e["title"] for e in body["data"]["events"]] == ["Soon", "Later"]

    limited = client.get("/api/events/featured/upcoming?limit=1").json()
    assert [e["title"] for e in limited["data"]["events"]] == ["Soon"]


@pytest.mark.django_db
def test_genres(client):
    resp = client.get("/api/events/meta/genres")
    assert resp.status_code == 200
    assert resp.json()["data"]["genres"] == GENRES
