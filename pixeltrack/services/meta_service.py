"""
Meta (Facebook) Graph API client: OAuth code exchange, credential
validation and Conversions API (CAPI) event forwarding.
"""
import logging
import time
from typing import Optional, Dict, Any, List
import httpx

from pixeltrack.core.config import settings
from pixeltrack.core.errors import MetaApiError
from pixeltrack.utils.encryption import hash_pii

logger = logging.getLogger(__name__)

# Provider error code -> message shown to the merchant
ERROR_MESSAGES = {
    100: "Invalid Dataset ID (Pixel ID). Please check your Dataset ID from Meta Events Manager.",
    190: "Invalid or expired access token. Please generate a new token from Meta Events Manager.",
    803: "Dataset ID not found. Please verify your Dataset ID (Pixel ID) from Meta Events Manager.",
    104: "Dataset ID not found. Please verify your Dataset ID (Pixel ID) from Meta Events Manager.",
    200: "Permission denied. Your access token doesn't have permission for this pixel.",
    10: "Application permission error. Please check your access token permissions.",
    2500: "Invalid access token format. Please copy the full access token from Meta Events Manager.",
}

# Pixel event names -> Meta standard events
STANDARD_EVENTS = {
    "pageview": "PageView",
    "page_view": "PageView",
    "view_content": "ViewContent",
    "product_view": "ViewContent",
    "add_to_cart": "AddToCart",
    "initiate_checkout": "InitiateCheckout",
    "checkout": "InitiateCheckout",
    "add_payment_info": "AddPaymentInfo",
    "purchase": "Purchase",
    "lead": "Lead",
    "search": "Search",
    "complete_registration": "CompleteRegistration",
}


def graph_url(path: str) -> str:
    return f"{settings.META_GRAPH_API_URL}/{settings.META_GRAPH_API_VERSION}/{path.lstrip('/')}"


async def _graph_request(
    method: str,
    path: str,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Call the Graph API and return the decoded JSON body.
    Graph reports errors inside the body, often with a 4xx status, so the
    status code is not checked here.
    """
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        response = await client.request(method, graph_url(path), params=params, json=json)
        data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected Graph API response: {type(data).__name__}")
    return data


def _raise_for_graph_error(data: Dict[str, Any]):
    error = data.get("error")
    if error:
        if not isinstance(error, dict):
            error = {"message": str(error)}
        raise MetaApiError(error.get("message") or "Meta API request failed", code=error.get("code") or 0)


async def exchange_code_for_token(code: str, redirect_uri: Optional[str]) -> str:
    """
    Exchange an OAuth authorization code for an access token.

    Raises:
        MetaApiError: the provider rejected the code
        httpx.HTTPError / ValueError: network or decoding failure
    """
    data = await _graph_request(
        "GET",
        "oauth/access_token",
        params={
            "client_id": settings.FACEBOOK_APP_ID,
            "client_secret": settings.FACEBOOK_APP_SECRET,
            "redirect_uri": redirect_uri or "",
            "code": code,
        },
    )
    _raise_for_graph_error(data)

    token = data.get("access_token")
    if not token:
        raise ValueError("Token response did not contain access_token")
    return token


async def validate_credentials(dataset_id: str, access_token: str) -> Dict[str, Any]:
    """
    Check that a dataset (pixel) id and access token work together.

    Returns:
        {"valid": True, "dataset_name": ...} or
        {"valid": False, "error": ..., "error_code": ...}
    """
    try:
        data = await _graph_request(
            "GET", dataset_id, params={"fields": "id,name", "access_token": access_token}
        )
        _raise_for_graph_error(data)
    except MetaApiError as e:
        return {
            "valid": False,
            "error": ERROR_MESSAGES.get(e.code, e.message),
            "error_code": e.code,
        }

    return {"valid": True, "dataset_name": data.get("name")}


def map_to_meta_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a CAPI server event from tracked event data.
    PII is hashed; IP and user agent are sent in clear as Meta requires.
    """
    event_name = event.get("event_name") or "CustomEvent"
    user_data = {
        "em": hash_pii(event.get("email")),
        "ph": hash_pii(event.get("phone")),
        "ct": hash_pii(event.get("city")),
        "st": hash_pii(event.get("region")),
        "country": hash_pii(event.get("country_code")),
        "external_id": hash_pii(event.get("fingerprint")),
        "client_ip_address": event.get("ip_address"),
        "client_user_agent": event.get("user_agent"),
        "fbc": event.get("fbc"),
        "fbp": event.get("fbp"),
    }

    custom_data = dict(event.get("custom_data") or {})
    if event.get("value") is not None:
        custom_data["value"] = event["value"]
    if event.get("currency"):
        custom_data["currency"] = event["currency"]
    if event.get("product_id"):
        custom_data["content_ids"] = [event["product_id"]]
        custom_data["content_type"] = "product"
    if event.get("product_name"):
        custom_data["content_name"] = event["product_name"]
    if event.get("quantity"):
        custom_data["num_items"] = event["quantity"]

    meta_event = {
        "event_name": STANDARD_EVENTS.get(event_name.lower(), event_name),
        "event_time": int(event.get("event_time") or time.time()),
        "action_source": "website",
        "user_data": {k: v for k, v in user_data.items() if v},
    }
    if event.get("event_id"):
        meta_event["event_id"] = str(event["event_id"])
    if event.get("url"):
        meta_event["event_source_url"] = event["url"]
    if custom_data:
        meta_event["custom_data"] = custom_data
    return meta_event


async def send_events(
    pixel_id: str,
    access_token: str,
    events: List[Dict[str, Any]],
    test_event_code: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Send server events to the Conversions API.

    Raises:
        MetaApiError: Graph rejected the batch
    """
    payload: Dict[str, Any] = {"data": events}
    if test_event_code:
        payload["test_event_code"] = test_event_code

    data = await _graph_request(
        "POST", f"{pixel_id}/events", params={"access_token": access_token}, json=payload
    )
    _raise_for_graph_error(data)

    logger.info(f"Meta CAPI accepted {data.get('events_received', 0)} event(s) for pixel {pixel_id}")
    return data
