"""
Tests for the pixel script endpoint and the legacy script redirect
"""
import asyncio

from starlette.requests import Request

from pixeltrack.api.v1.pixel import legacy_pixel_redirect


def test_legacy_path_redirects_with_query(client):
    response = client.get(
        "/apps/tools/pixel.js?id=abc123&shop=store.myshopify.com",
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "/pixel.js?id=abc123&shop=store.myshopify.com"


def test_legacy_path_keeps_query_verbatim(client):
    response = client.get("/apps/tools/pixel.js?shop=my%20store&id=x&id=y", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/pixel.js?shop=my%20store&id=x&id=y"


def test_legacy_path_does_not_requote_query(client):
    response = client.get("/apps/tools/pixel.js?id=a|b&x={1}", follow_redirects=False)
    assert response.status_code == 302
    # the redirect carries exactly the query string the server received
    sent = response.request.url.query.decode("ascii")
    assert response.headers["location"] == f"/pixel.js?{sent}"


def test_legacy_redirect_keeps_unsafe_characters():
    request = Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": "/apps/tools/pixel.js",
        "root_path": "",
        "query_string": b"id=a|b&x={1}",
        "headers": [],
    })

    response = asyncio.run(legacy_pixel_redirect(request))
    assert response.status_code == 302
    assert response.headers["location"] == "/pixel.js?id=a|b&x={1}"


def test_legacy_path_without_query(client):
    response = client.get("/apps/tools/pixel.js", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/pixel.js"


def test_pixel_requires_id(client):
    response = client.get("/pixel.js")
    assert response.status_code == 400
    assert response.text == "// Missing app ID"
    assert response.headers["content-type"].startswith("application/javascript")


def test_pixel_unknown_app(client):
    response = client.get("/pixel.js", params={"id": "missing-app"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/javascript")
    assert "App not found" in response.text
    assert '"missing-app"' in response.text


def test_pixel_script_for_app(client, test_app):
    response = client.get("/pixel.js", params={"id": test_app.app_id, "shop": "store.myshopify.com"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/javascript")
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["x-content-type-options"] == "nosniff"

    script = response.text
    assert f'var APP_ID = "{test_app.app_id}";' in script
    assert 'var SHOP_DOMAIN = "store.myshopify.com";' in script
    assert "/api/track" in script
    assert '"autoPageviews": true' in script


def test_pixel_script_follows_redirect(client, test_app):
    response = client.get(f"/apps/tools/pixel.js?id={test_app.app_id}")
    assert response.status_code == 200
    assert test_app.app_id in response.text


def test_pixel_script_includes_active_custom_events(client, test_app, make_custom_event):
    make_custom_event(test_app, name="add_to_cart", selector=".add-to-cart", meta_event_name="AddToCart")
    make_custom_event(test_app, name="old_event", selector=".old", is_active=False)

    script = client.get("/pixel.js", params={"id": test_app.app_id}).text
    assert ".add-to-cart" in script
    assert "AddToCart" in script
    assert "old_event" not in script


def test_pixel_script_escapes_shop(client, test_app):
    script = client.get("/pixel.js", params={"id": test_app.app_id, "shop": "</script><script>alert(1)"}).text
    assert "</script>" not in script
