"""
Tests for User-Agent parsing and bot detection
"""
import pytest

from pixeltrack.services.device_service import parse_device, get_device_type, is_bot

IPHONE_SAFARI = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
MAC_FIREFOX = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:121.0) Gecko/20100101 Firefox/121.0"
WINDOWS_EDGE = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.2210.91"
)
ANDROID_TABLET = (
    "Mozilla/5.0 (Linux; Android 13; SM-X700) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)


def test_iphone_safari():
    device = parse_device(IPHONE_SAFARI)
    assert device.browser == "Safari"
    assert device.browser_version == "17.1"
    assert device.os == "iOS"
    assert device.os_version == "17.1"
    assert device.device_type == "mobile"


def test_mac_firefox():
    device = parse_device(MAC_FIREFOX)
    assert device.browser == "Firefox"
    assert device.os == "macOS"
    assert device.os_version == "10.15"
    assert device.device_type == "desktop"


def test_edge_is_not_reported_as_chrome():
    device = parse_device(WINDOWS_EDGE)
    assert device.browser == "Edge"
    assert device.os == "Windows"


def test_android_without_mobile_is_tablet():
    device = parse_device(ANDROID_TABLET)
    assert device.os == "Android"
    assert device.device_type == "tablet"


def test_missing_user_agent():
    assert parse_device(None).to_dict() == {
        "browser": None,
        "browser_version": None,
        "os": None,
        "os_version": None,
        "device_type": None,
    }


@pytest.mark.parametrize("width, expected", [(375, "mobile"), (800, "tablet"), (1440, "desktop")])
def test_screen_width_wins_over_user_agent(width, expected):
    assert get_device_type(MAC_FIREFOX, width) == expected


def test_device_type_falls_back_to_user_agent():
    assert get_device_type(IPHONE_SAFARI, None) == "mobile"


@pytest.mark.parametrize("user_agent", [
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) HeadlessChrome/120.0.0.0 Safari/537.36",
])
def test_bots(user_agent):
    assert is_bot(user_agent)


def test_browsers_are_not_bots():
    assert not is_bot(IPHONE_SAFARI)
    assert not is_bot(WINDOWS_EDGE)
    assert not is_bot(None)
