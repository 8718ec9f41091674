"""
Pixel script endpoints (served at the site root, not under /api).
"""
import logging
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional

from pixeltrack.core.database import get_db
from pixeltrack.core.errors import AppNotFoundError
from pixeltrack.services.app_service import AppService
from pixeltrack.services.event_service import EventService
from pixeltrack.services.pixel_script import (
    JS_CONTENT_TYPE,
    render_pixel_script,
    render_not_found_script,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SCRIPT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "X-Content-Type-Options": "nosniff",
    "Cache-Control": "public, max-age=300",
}

CANONICAL_SCRIPT_PATH = "/pixel.js"


@router.get("/pixel.js")
async def pixel_script(
    id: Optional[str] = Query(None),
    shop: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Serve the tracking script for an app.
    Unknown ids get a stub script (200) so storefront pages never break.
    """
    if not id:
        return Response("// Missing app ID", status_code=400, media_type=JS_CONTENT_TYPE, headers=SCRIPT_HEADERS)

    try:
        app = AppService(db).get_app_by_app_id(id)
    except AppNotFoundError:
        logger.info(f"[Pixel] App not found: {id} (shop: {shop})")
        return Response(render_not_found_script(id), media_type=JS_CONTENT_TYPE, headers=SCRIPT_HEADERS)

    custom_events = EventService(db, app).list_custom_events(active_only=True)
    script = render_pixel_script(app, custom_events, shop=shop)
    return Response(script, media_type=JS_CONTENT_TYPE, headers=SCRIPT_HEADERS)


@router.get("/apps/tools/pixel.js")
async def legacy_pixel_redirect(request: Request):
    """
    Legacy script path. Redirects to /pixel.js with the query string
    carried over byte for byte.
    """
    query = request.url.query
    target = f"{CANONICAL_SCRIPT_PATH}?{query}" if query else CANONICAL_SCRIPT_PATH
    # RedirectResponse re-quotes | { }; the query must go out as sent
    return Response(status_code=302, headers={"location": target})
