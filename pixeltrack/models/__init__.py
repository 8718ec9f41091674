"""
SQLAlchemy models
"""
from pixeltrack.models.app import App, AppSettings
from pixeltrack.models.event import Event
from pixeltrack.models.session import AnalyticsSession, DailyStats
from pixeltrack.models.custom_event import CustomEvent

__all__ = [
    "App",
    "AppSettings",
    "Event",
    "AnalyticsSession",
    "DailyStats",
    "CustomEvent",
]

# Import Base for Alembic
from pixeltrack.core.database import Base
