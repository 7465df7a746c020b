"""
Tests for the Ticketmaster client: payload normalization and the mapping
of vendor failures onto API errors.
"""
from datetime import datetime, timezone as dt_timezone

import pytest
import requests
from rest_framework.exceptions import ValidationError

from common.exceptions import VendorUnavailable
from events.ticketmaster import TicketmasterClient, format_api_datetime, normalize_events

SAMPLE = {
    "_embedded": {
        "events": [
            {
                "id": "G5vYZ9",
                "name": "Arctic Night",
                "url": "https://tm.example/e/G5vYZ9",
                "images": [
                    {"ratio": "4_3", "url": "https://img.example/4x3.jpg"},
                    {"ratio": "16_9", "url": "https://img.example/16x9.jpg"},
                ],
                "dates": {"start": {"dateTime": "2030-06-01T19:30:00Z", "localDate": "2030-06-01"}},
                "classifications": [{"segment": {"name": "Music"}, "genre": {"name": "Rock"}}],
                "priceRanges": [
                    {"type": "standard", "currency": "USD", "min": 45.0, "max": 120.5},
                    {"type": "vip", "currency": "USD", "min": 300.0, "max": 500.0},
                ],
                "_embedded": {
                    "venues": [
                        {
                            "name": "Moody Center",
                            "postalCode": "78712",
                            "city": {"name": "Austin"},
                            "state": {"name": "Texas", "stateCode": "TX"},
                            "country": {"name": "United States Of America", "countryCode": "US"},
                            "address": {"line1": "2001 Robert Dedman Dr"},
                            "location": {"longitude": "-97.73", "latitude": "30.28"},
                        }
                    ],
                    "attractions": [{"name": "Arctic Monkeys"}],
                },
            },
            {
                "id": "K8x",
                "name": "Local Showcase",
                "dates": {"start": {"localDate": "2030-07-04"}},
                "_embedded": {
                    "attractions": [
                        {
                            "name": "Openers",
                            "images": [{"ratio": "3_2", "url": "https://img.example/attraction.jpg"}],
                            "classifications": [{"segment": {"name": "Music"}}],
                        }
                    ]
                },
            },
            {"id": "Z1", "name": "Mystery", "dates": {"start": {}}},
        ]
    },
    "page": {"size": 3, "totalElements": 42, "totalPages": 14, "number": 2},
}


def test_normalize_prefers_16_9_image_and_first_price_range():
    first = normalize_events(SAMPLE)["events"][0]

    assert first["external_id"] == "G5vYZ9"
    assert first["title"] == "Arctic Night"
    assert first["artist_name"] == "Arctic Monkeys"
    assert first["venue_name"] == "Moody Center"
    assert first["image_url"] == "https://img.example/16x9.jpg"
    assert first["genre"] == "rock"
    assert first["price_range"] == {"min": 45.0, "max": 120.5, "currency": "USD"}
    assert first["event_date"] == datetime(2030, 6, 1, 19, 30, tzinfo=dt_timezone.utc)
    assert first["venue_address"]["stateCode"] == "TX"
    assert first["venue_address"]["latitude"] == pytest.approx(30.28)
    assert first["external_source"] == "ticketmaster"


def test_normalize_falls_back_for_missing_fields():
    _, second, third = normalize_events(SAMPLE)["events"]

    assert second["event_date"] == datetime(2030, 7, 4, 20, 0, tzinfo=dt_timezone.utc)
    assert second["image_url"] == "https://img.example/attraction.jpg"
    assert second["genre"] == "music"
    assert second["venue_name"] is None
    assert second["venue_address"] is None
    assert second["price_range"] is None

    assert third["event_date"] is None
    assert third["artist_name"] is None
    assert third["genre"] == "music"


def test_normalize_pagination():
    assert normalize_events(SAMPLE)["pagination"] == {
        "page": 2, "size": 3, "totalElements": 42, "totalPages": 14,
    }
    assert normalize_events({}) == {
        "events": [],
        "pagination": {"page": 0, "size": 0, "totalElements": 0, "totalPages": 0},
    }


def test_format_api_datetime_drops_fraction():
    value = datetime(2030, 1, 2, 3, 4, 5, 678000, tzinfo=dt_timezone.utc)
    assert format_api_datetime(value) == "2030-01-02T03:04:05Z"


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


def test_search_sends_discovery_params():
    session = FakeSession(FakeResponse(200, SAMPLE))
    client = TicketmasterClient(api_key="k", base_url="https://tm.example/v2", timeout=10, session=session)

    result = client.search(
        city="Austin",
        state_code="TX",
        genre="rock",
        keyword="arctic",
        start=datetime(2030, 1, 1, tzinfo=dt_timezone.utc),
        end=datetime(2030, 12, 31, tzinfo=dt_timezone.utc),
        size=10,
        page=1,
        radius=25,
    )

    url, params, timeout = session.calls[0]
    assert url == "https://tm.example/v2/events.json"
    assert timeout == 10
    assert params["apikey"] == "k"
    assert params["classificationName"] == "rock"
    assert params["stateCode"] == "TX"
    assert params["startDateTime"] == "2030-01-01T00:00:00Z"
    assert params["endDateTime"] == "2030-12-31T00:00:00Z"
    assert params["sort"] == "date,asc"
    assert len(result["events"]) == 3


@pytest.mark.parametrize(
    "status_code, message",
    [
        (401, "Ticketmaster error: invalid API key"),
        (429, "Ticketmaster error: rate limit exceeded"),
        (400, "Ticketmaster error: request failed with status 400"),
    ],
)
def test_vendor_errors_become_validation_errors(status_code, message):
    client = TicketmasterClient(api_key="k", session=FakeSession(FakeResponse(status_code, {"fault": "x"})))
    with pytest.raises(ValidationError) as exc:
        client.search()
    assert exc.value.detail[0] == message


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("down")])
def test_unreachable_vendor_is_unavailable(error):
    client = TicketmasterClient(api_key="k", session=FakeSession(error=error))
    with pytest.raises(VendorUnavailable):
        client.search()


def test_gateway_error_after_retries_is_unavailable():
    client = TicketmasterClient(api_key="k", session=FakeSession(FakeResponse(503, {})))
    with pytest.raises(VendorUnavailable):
        client.search()


def test_missing_api_key_is_a_validation_error():
    client = TicketmasterClient(api_key="", session=FakeSession(FakeResponse(200, SAMPLE)))
    with pytest.raises(ValidationError) as exc:
        client.search()
    assert "API key not configured" in str(exc.value.detail[0])
