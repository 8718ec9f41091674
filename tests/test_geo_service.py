"""
Tests for IP geolocation
"""
import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from pixeltrack.services import geo_service
from pixeltrack.services.geo_service import get_geo_data, is_private_ip, EMPTY_GEO


@pytest.fixture
def fetch(monkeypatch):
    mock = AsyncMock()
    monkeypatch.setattr(geo_service, "_fetch_geo", mock)
    return mock


@pytest.mark.parametrize("ip", ["127.0.0.1", "10.1.2.3", "192.168.0.10", "::1", "testclient", "", None])
def test_private_and_invalid_ips(ip):
    assert is_private_ip(ip)


def test_public_ip():
    assert not is_private_ip("8.8.8.8")


def test_private_ip_is_not_looked_up(fetch):
    assert asyncio.run(get_geo_data("192.168.1.1")) == EMPTY_GEO
    fetch.assert_not_called()


def test_lookup_maps_fields(fetch):
    fetch.return_value = {
        "status": "success",
        "country": "Germany",
        "countryCode": "DE",
        "region": "BE",
        "city": "Berlin",
        "zip": "10115",
        "lat": 52.52,
        "lon": 13.405,
        "timezone": "Europe/Berlin",
        "isp": "Example ISP",
    }

    geo = asyncio.run(get_geo_data("8.8.8.8"))
    assert geo["country"] == "Germany"
    assert geo["country_code"] == "DE"
    assert geo["city"] == "Berlin"
    assert geo["lat"] == 52.52
    fetch.assert_called_once_with("8.8.8.8")


def test_failed_lookup_status(fetch):
    fetch.return_value = {"status": "fail", "message": "reserved range"}
    assert asyncio.run(get_geo_data("8.8.8.8")) == EMPTY_GEO


def test_network_error_gives_empty_geo(fetch):
    fetch.side_effect = httpx.ConnectTimeout("timed out")
    assert asyncio.run(get_geo_data("8.8.8.8")) == EMPTY_GEO
