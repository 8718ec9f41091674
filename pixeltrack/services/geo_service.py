"""
Geo lookup by IP using ip-api.com (free tier: 45 requests/minute).
Results are cached in Redis when it is available.
"""
import ipaddress
import logging
from typing import Optional, Dict, Any
import httpx

from pixeltrack.core.config import settings
from pixeltrack.core.redis import cache

logger = logging.getLogger(__name__)

GEO_FIELDS = "status,country,countryCode,region,city,zip,lat,lon,timezone,isp"
CACHE_PREFIX = "geo"

EMPTY_GEO: Dict[str, Any] = {
    "country": None,
    "country_code": None,
    "region": None,
    "city": None,
    "zip": None,
    "lat": None,
    "lon": None,
    "timezone": None,
    "isp": None,
}


def is_private_ip(ip: Optional[str]) -> bool:
    """Loopback, private, link-local and unparseable addresses are never looked up"""
    if not ip:
        return True
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return True
    return address.is_private or address.is_loopback or address.is_link_local or address.is_unspecified


async def _fetch_geo(ip: str) -> Dict[str, Any]:
    """Raw ip-api response"""
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        response = await client.get(f"{settings.GEO_API_URL}/{ip}", params={"fields": GEO_FIELDS})
        response.raise_for_status()
        return response.json()


async def get_geo_data(ip: Optional[str]) -> Dict[str, Any]:
    """
    Look up location for an IP.

    Args:
        ip: Client IP address

    Returns:
        Dict with EMPTY_GEO keys. Never raises; lookup failures give empty data.
    """
    if is_private_ip(ip):
        return dict(EMPTY_GEO)

    cache_key = f"{CACHE_PREFIX}:{ip}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        data = await _fetch_geo(ip)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Geo lookup failed for {ip}: {e}")
        return dict(EMPTY_GEO)

    if data.get("status") != "success":
        return dict(EMPTY_GEO)

    geo = {
        "country": data.get("country") or None,
        "country_code": data.get("countryCode") or None,
        "region": data.get("region") or None,
        "city": data.get("city") or None,
        "zip": data.get("zip") or None,
        "lat": data.get("lat"),
        "lon": data.get("lon"),
        "timezone": data.get("timezone") or None,
        "isp": data.get("isp") or None,
    }
    cache.set(cache_key, geo, ttl=settings.GEO_CACHE_TTL)
    return geo
