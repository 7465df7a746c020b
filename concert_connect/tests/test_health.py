import pytest


@pytest.mark.django_db
def test_health_is_public(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["environment"] == "production"
    assert body["uptime"] >= 0


@pytest.mark.django_db
def test_unknown_api_route_is_404(client):
    assert client.get("/api/nowhere").status_code == 404
