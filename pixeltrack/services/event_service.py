"""
Event Service - read access over stored events for one app
"""
import logging
from typing import Optional, List, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pixeltrack.core.errors import DatabaseError
from pixeltrack.models.app import App
from pixeltrack.models.event import Event
from pixeltrack.models.custom_event import CustomEvent

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class EventService:
    """
    Event queries, always scoped to a single app.
    Pagination is offset based; pages can shift while events are being inserted.
    """

    def __init__(self, db: Session, app: App):
        self.db = db
        self.app = app

    def list_events(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
        event_name: Optional[str] = None,
    ) -> Tuple[List[Event], int]:
        """
        Get one page of events, newest first.

        Args:
            limit: Maximum number of events to return
            offset: Number of events to skip
            event_name: Exact-match filter on event name

        Returns:
            (events, total) where total counts every event matching the filter
        """
        limit = max(0, limit)
        offset = max(0, offset)

        query = self.db.query(Event).filter(Event.app_id == self.app.id)
        if event_name:
            query = query.filter(Event.event_name == event_name)

        try:
            total = query.count()
            events = (
                query.order_by(Event.created_at.desc(), Event.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error querying events for app {self.app.app_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        return events, total

    def list_custom_events(self, active_only: bool = False) -> List[CustomEvent]:
        """Custom event definitions for the app, newest first"""
        query = self.db.query(CustomEvent).filter(CustomEvent.app_id == self.app.id)
        if active_only:
            query = query.filter(CustomEvent.is_active.is_(True))

        try:
            return query.order_by(CustomEvent.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Error querying custom events for app {self.app.app_id}: {e}", exc_info=True)
            raise DatabaseError() from e
