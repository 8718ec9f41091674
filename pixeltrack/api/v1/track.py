"""
Event ingestion endpoint, called by the pixel from storefront pages.
"""
import json
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from pixeltrack.core.config import settings
from pixeltrack.core.database import get_db
from pixeltrack.core.dependencies import get_client_ip
from pixeltrack.core.errors import ValidationError
from pixeltrack.core.rate_limit import limiter
from pixeltrack.schemas.event import TrackRequest, TrackResponse
from pixeltrack.services.tracking_service import TrackingService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_payload(request: Request) -> TrackRequest:
    """
    Parse the tracking payload.
    navigator.sendBeacon posts JSON as text/plain, so the content type is not trusted.
    """
    raw = await request.body()
    try:
        data = json.loads(raw or b"null")
    except ValueError as e:
        raise ValidationError("Invalid JSON body") from e
    if not isinstance(data, dict):
        raise ValidationError("Missing required fields")

    try:
        return TrackRequest.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Invalid tracking payload") from e


@router.post("/track", response_model=TrackResponse)
@limiter.limit(settings.TRACK_RATE_LIMIT)
async def track(request: Request, db: Session = Depends(get_db)):
    """
    Record one event from the pixel.

    Bot traffic is acknowledged but not stored (eventId is null).

    Returns:
        {"success": true, "eventId": ...}
    """
    payload = await _read_payload(request)
    event_id = await TrackingService(db).track_event(
        payload,
        ip=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return {"success": True, "event_id": event_id}


@router.get("/track")
async def track_get():
    """Beacon fallbacks sometimes GET; only POST is accepted"""
    return JSONResponse(status_code=405, content={"error": "Use POST method"})
