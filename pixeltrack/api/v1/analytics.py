"""
Dashboard read endpoints: analytics overview, visitors, custom events.
All are scoped by the `appId` query parameter.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from pixeltrack.core.database import get_db
from pixeltrack.core.dependencies import get_app_from_query
from pixeltrack.models.app import App
from pixeltrack.services.analytics_service import AnalyticsService, DEFAULT_RANGE
from pixeltrack.services.event_service import EventService
from pixeltrack.schemas.event import CustomEventResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/analytics")
async def get_analytics(
    range: Optional[str] = Query(DEFAULT_RANGE, description="24h, 7d, 30d or 90d"),
    app: App = Depends(get_app_from_query),
    db: Session = Depends(get_db)
):
    """
    Overview for the dashboard: totals, top pages/referrers/countries/
    browsers/devices/events, daily stats and the 20 most recent events.
    """
    return AnalyticsService(db, app).get_overview(range)


@router.get("/visitors")
async def get_visitors(
    app: App = Depends(get_app_from_query),
    db: Session = Depends(get_db)
):
    """Visitor sessions: active now, totals, average duration, bounce rate"""
    return AnalyticsService(db, app).get_visitors()


@router.get("/custom-events")
async def list_custom_events(
    app: App = Depends(get_app_from_query),
    db: Session = Depends(get_db)
):
    events = EventService(db, app).list_custom_events()
    return {
        "events": [
            CustomEventResponse.model_validate(e).model_dump(mode="json", by_alias=True) for e in events
        ]
    }
