"""
Event query endpoints.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from pixeltrack.core.database import get_db
from pixeltrack.core.dependencies import get_app_from_query
from pixeltrack.models.app import App
from pixeltrack.schemas.event import EventPage
from pixeltrack.services.event_service import EventService, DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/events", response_model=EventPage)
async def list_events(
    limit: int = Query(DEFAULT_PAGE_SIZE),
    offset: int = Query(0),
    event_name: Optional[str] = Query(None, alias="eventName"),
    app: App = Depends(get_app_from_query),
    db: Session = Depends(get_db)
):
    """
    List events for an app, newest first.

    Args:
        limit: Maximum number of events to return (default 50)
        offset: Number of events to skip
        event_name: Exact-match filter on event name
        app: Resolved from the `appId` query parameter

    Returns:
        {"events": [...], "total": N}; total counts all matching events
    """
    events, total = EventService(db, app).list_events(limit=limit, offset=offset, event_name=event_name)
    return {"events": events, "total": total}
