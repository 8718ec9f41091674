"""
Tests for dashboard reports: /api/analytics, /api/visitors, /api/custom-events
"""
from datetime import date, datetime, timedelta, timezone

from pixeltrack.models.session import AnalyticsSession, DailyStats


def _recent(minutes_ago=0):
    return datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)


def test_analytics_requires_app(client):
    assert client.get("/api/analytics").status_code == 400
    assert client.get("/api/analytics", params={"appId": "nope"}).status_code == 404


def test_analytics_overview(client, db_session, test_app, make_event):
    make_event(test_app, "pageview", created_at=_recent(30), url="https://shop.example.com/",
               fingerprint="v1", country="Germany", browser="Chrome", device_type="desktop")
    make_event(test_app, "pageview", created_at=_recent(20), url="https://shop.example.com/",
               fingerprint="v2", country="France", browser="Firefox", device_type="mobile",
               referrer="https://google.com/")
    make_event(test_app, "add_to_cart", created_at=_recent(10), fingerprint="v1", country="Germany")
    # outside the 24h window
    make_event(test_app, "pageview", created_at=_recent(60 * 48), fingerprint="v3")
    db_session.add(DailyStats(app_id=test_app.id, date=date.today(), pageviews=2, unique_users=2, sessions=1))
    db_session.commit()

    response = client.get("/api/analytics", params={"appId": test_app.app_id, "range": "24h"})
    assert response.status_code == 200
    data = response.json()

    assert data["range"] == "24h"
    assert data["app"]["appId"] == test_app.app_id
    assert data["overview"]["totalEvents"] == 3
    assert data["overview"]["pageviews"] == 2
    assert data["overview"]["uniqueVisitors"] == 2
    assert data["topPages"] == [{"url": "https://shop.example.com/", "count": 2}]
    assert {"country": "Germany", "count": 2} in data["topCountries"]
    assert data["topEvents"] == [{"event": "add_to_cart", "count": 1}]
    assert {"referrer": "Direct", "count": 2} in data["topReferrers"]
    assert len(data["recentEvents"]) == 3
    assert data["recentEvents"][0]["eventName"] == "add_to_cart"


def test_analytics_unknown_range_falls_back(client, test_app):
    data = client.get("/api/analytics", params={"appId": test_app.app_id, "range": "1y"}).json()
    assert data["range"] == "7d"


def test_visitors(client, db_session, test_app):
    now = datetime.now(timezone.utc)
    db_session.add_all([
        AnalyticsSession(app_id=test_app.id, session_id="s1", fingerprint="v1", pageviews=1,
                         device_type="mobile", country="Germany",
                         start_time=now - timedelta(minutes=2), last_seen=now - timedelta(minutes=1)),
        AnalyticsSession(app_id=test_app.id, session_id="s2", fingerprint="v2", pageviews=3,
                         device_type="desktop", country="Germany",
                         start_time=now - timedelta(hours=2), last_seen=now - timedelta(hours=2) + timedelta(minutes=3)),
    ])
    db_session.commit()

    response = client.get("/api/visitors", params={"appId": test_app.app_id})
    assert response.status_code == 200
    data = response.json()

    assert data["activeNow"] == 1
    assert data["totalSessions"] == 2
    assert data["uniqueVisitors"] == 2
    assert data["avgDuration"] == 120
    assert data["bounceRate"] == 50
    assert [s["sessionId"] for s in data["sessions"]] == ["s1", "s2"]
    assert data["topCountries"] == [{"country": "Germany", "count": 2}]


def test_visitors_empty(client, test_app):
    data = client.get("/api/visitors", params={"appId": test_app.app_id}).json()
    assert data["totalSessions"] == 0
    assert data["avgDuration"] == 0
    assert data["bounceRate"] == 0
    assert data["sessions"] == []


def test_custom_events(client, test_app, make_custom_event):
    make_custom_event(test_app, name="add_to_cart", selector=".add-to-cart", meta_event_name="AddToCart")
    make_custom_event(test_app, name="newsletter", selector="form.newsletter", is_active=False)

    response = client.get("/api/custom-events", params={"appId": test_app.app_id})
    assert response.status_code == 200
    events = response.json()["events"]

    assert {e["name"] for e in events} == {"add_to_cart", "newsletter"}
    cart = next(e for e in events if e["name"] == "add_to_cart")
    assert cart["metaEventName"] == "AddToCart"
    assert cart["isActive"] is True
    assert cart["eventType"] == "click"
