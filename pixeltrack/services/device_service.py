"""
Device detection from the User-Agent header.
Coarse substring classification; good enough for dashboard breakdowns.
"""
import re
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

# Order matters: Edge and Opera also say "Chrome", Chrome also says "Safari"
_BROWSERS = [
    ("Edge", re.compile(r"Edg(?:e|A|iOS)?/([\d.]+)")),
    ("Opera", re.compile(r"(?:OPR|Opera)/([\d.]+)")),
    ("Samsung Internet", re.compile(r"SamsungBrowser/([\d.]+)")),
    ("Firefox", re.compile(r"(?:Firefox|FxiOS)/([\d.]+)")),
    ("Chrome", re.compile(r"(?:Chrome|CriOS)/([\d.]+)")),
    ("Safari", re.compile(r"Version/([\d.]+).*Safari/")),
]

_OPERATING_SYSTEMS = [
    ("Windows", re.compile(r"Windows NT ([\d.]+)")),
    ("iOS", re.compile(r"(?:iPhone|iPad|iPod).*? OS ([\d_]+)")),
    ("Android", re.compile(r"Android ([\d.]+)")),
    ("macOS", re.compile(r"Mac OS X ([\d_.]+)")),
    ("Chrome OS", re.compile(r"CrOS \S+ ([\d.]+)")),
    ("Linux", re.compile(r"Linux()")),
]

_BOT_PATTERN = re.compile(
    r"bot|spider|crawl|slurp|mediapartners|yandex|baiduspider|facebookexternalhit|"
    r"embedly|quora link preview|outbrain|pinterest|vkshare|w3c_validator|whatsapp|"
    r"lighthouse|headless|phantom|selenium|webdriver",
    re.IGNORECASE,
)


@dataclass
class DeviceData:
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    device_type: Optional[str] = None  # desktop, mobile, tablet

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _match(patterns, user_agent: str):
    for name, pattern in patterns:
        match = pattern.search(user_agent)
        if match:
            version = match.group(1).replace("_", ".") if match.group(1) else None
            return name, version
    return None, None


def _device_type_from_ua(user_agent: str) -> Optional[str]:
    ua = user_agent.lower()
    if "ipad" in ua or "tablet" in ua or ("android" in ua and "mobile" not in ua):
        return "tablet"
    if "mobi" in ua or "iphone" in ua or "ipod" in ua:
        return "mobile"
    return None


def parse_device(user_agent: Optional[str]) -> DeviceData:
    """
    Parse a User-Agent header.

    Args:
        user_agent: Raw header value, may be None

    Returns:
        DeviceData; every field None when the header is missing or unrecognized
    """
    if not user_agent:
        return DeviceData()

    browser, browser_version = _match(_BROWSERS, user_agent)
    os_name, os_version = _match(_OPERATING_SYSTEMS, user_agent)

    device_type = _device_type_from_ua(user_agent)
    if device_type is None and browser:
        # A recognized browser with no mobile/tablet hints is a desktop
        device_type = "desktop"

    return DeviceData(
        browser=browser,
        browser_version=browser_version,
        os=os_name,
        os_version=os_version,
        device_type=device_type,
    )


def get_device_type(user_agent: Optional[str], screen_width: Optional[int] = None) -> Optional[str]:
    """Device type, preferring the reported screen width over the User-Agent"""
    if screen_width:
        if screen_width < 768:
            return "mobile"
        if screen_width < 1024:
            return "tablet"
        return "desktop"
    return parse_device(user_agent).device_type


def is_bot(user_agent: Optional[str]) -> bool:
    """Crawlers, link previewers and headless browsers"""
    if not user_agent:
        return False
    return bool(_BOT_PATTERN.search(user_agent))
