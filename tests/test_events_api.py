"""
Tests for the event query API (GET /api/events)
"""
import logging
from uuid import UUID

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query


def test_events_require_app_id(client):
    response = client.get("/api/events")
    assert response.status_code == 400
    assert response.json() == {"error": "App ID required"}


def test_events_empty_app_id_is_missing(client):
    response = client.get("/api/events", params={"appId": ""})
    assert response.status_code == 400
    assert response.json()["error"] == "App ID required"


def test_events_unknown_app(client):
    response = client.get("/api/events", params={"appId": "doesnotexist"})
    assert response.status_code == 404
    assert response.json() == {"error": "App not found"}


def test_events_empty_app(client, test_app):
    response = client.get("/api/events", params={"appId": test_app.app_id})
    assert response.status_code == 200
    assert response.json() == {"events": [], "total": 0}


def test_events_newest_first(client, test_app, make_event):
    first = make_event(test_app, "pageview", minutes=0)
    second = make_event(test_app, "add_to_cart", minutes=5)
    third = make_event(test_app, "pageview", minutes=10)

    response = client.get("/api/events", params={"appId": test_app.app_id})
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 3
    assert [e["id"] for e in data["events"]] == [str(third.id), str(second.id), str(first.id)]


def test_events_response_shape(client, test_app, make_event):
    make_event(
        test_app, "pageview",
        url="https://shop.example.com/products/1",
        city="Berlin",
        country="Germany",
        browser="Chrome",
        device_type="desktop",
        ip_address="203.0.113.7",
    )

    response = client.get("/api/events", params={"appId": test_app.app_id})
    event = response.json()["events"][0]

    assert set(event) == {"id", "eventName", "url", "city", "country", "browser", "deviceType", "createdAt"}
    assert UUID(event["id"])
    assert event["eventName"] == "pageview"
    assert event["deviceType"] == "desktop"
    assert event["country"] == "Germany"


def test_events_pagination(client, test_app, make_event):
    for i in range(7):
        make_event(test_app, "pageview", minutes=i)

    page = client.get("/api/events", params={"appId": test_app.app_id, "limit": 3, "offset": 0}).json()
    assert len(page["events"]) == 3
    assert page["total"] == 7

    page = client.get("/api/events", params={"appId": test_app.app_id, "limit": 3, "offset": 6}).json()
    assert len(page["events"]) == 1
    assert page["total"] == 7

    page = client.get("/api/events", params={"appId": test_app.app_id, "limit": 3, "offset": 10}).json()
    assert page["events"] == []
    assert page["total"] == 7


def test_events_pages_do_not_overlap(client, test_app, make_event):
    for i in range(5):
        make_event(test_app, "pageview", minutes=i)

    first = client.get("/api/events", params={"appId": test_app.app_id, "limit": 2}).json()
    second = client.get("/api/events", params={"appId": test_app.app_id, "limit": 2, "offset": 2}).json()

    first_ids = {e["id"] for e in first["events"]}
    second_ids = {e["id"] for e in second["events"]}
    assert first_ids.isdisjoint(second_ids)


def test_events_default_limit(client, test_app, make_event):
    for i in range(55):
        make_event(test_app, "pageview", minutes=i)

    data = client.get("/api/events", params={"appId": test_app.app_id}).json()
    assert len(data["events"]) == 50
    assert data["total"] == 55


def test_events_filter_by_name(client, test_app, make_event):
    make_event(test_app, "pageview", minutes=0)
    make_event(test_app, "add_to_cart", minutes=1)
    make_event(test_app, "add_to_cart", minutes=2)

    data = client.get("/api/events", params={"appId": test_app.app_id, "eventName": "add_to_cart"}).json()
    assert data["total"] == 2
    assert all(e["eventName"] == "add_to_cart" for e in data["events"])


def test_events_filter_no_match(client, test_app, make_event):
    make_event(test_app, "pageview")

    data = client.get("/api/events", params={"appId": test_app.app_id, "eventName": "purchase"}).json()
    assert data == {"events": [], "total": 0}


def test_events_scoped_to_app(client, make_app, make_event):
    app_a = make_app()
    app_b = make_app()
    make_event(app_a, "pageview")
    make_event(app_b, "pageview")
    make_event(app_b, "pageview", minutes=1)

    data = client.get("/api/events", params={"appId": app_a.app_id}).json()
    assert data["total"] == 1


def test_events_invalid_limit(client, test_app):
    response = client.get("/api/events", params={"appId": test_app.app_id, "limit": "abc"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_events_negative_offset_is_clamped(client, test_app, make_event):
    make_event(test_app, "pageview")

    data = client.get("/api/events", params={"appId": test_app.app_id, "offset": -5}).json()
    assert data["total"] == 1
    assert len(data["events"]) == 1


def test_events_database_failure(client, test_app, monkeypatch, caplog):
    def broken(self):
        raise OperationalError("SELECT count(*) FROM events", {}, Exception("connection lost"))

    monkeypatch.setattr(Query, "count", broken)

    with caplog.at_level(logging.ERROR, logger="pixeltrack.services.event_service"):
        response = client.get("/api/events", params={"appId": test_app.app_id})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}
    assert "connection lost" not in response.text
    assert f"Error querying events for app {test_app.app_id}" in caplog.text
