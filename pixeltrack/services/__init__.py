"""
Business logic services.
Everything below the HTTP layer is scoped to one app and one request session.
"""
from pixeltrack.services.app_service import AppService
from pixeltrack.services.event_service import EventService
from pixeltrack.services.tracking_service import TrackingService
from pixeltrack.services.analytics_service import AnalyticsService

__all__ = [
    "AppService",
    "EventService",
    "TrackingService",
    "AnalyticsService",
]
