"""
Analytics Service - aggregated reports for the merchant dashboard
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func, distinct

from pixeltrack.models.app import App
from pixeltrack.models.event import Event
from pixeltrack.models.session import AnalyticsSession, DailyStats
from pixeltrack.schemas.event import EventResponse

logger = logging.getLogger(__name__)

DATE_RANGES = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
}
DEFAULT_RANGE = "7d"
TOP_LIMIT = 10
RECENT_EVENTS_LIMIT = 20
RECENT_SESSIONS_LIMIT = 100
ACTIVE_WINDOW = timedelta(minutes=5)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AnalyticsService:
    """Reports over one app's events and sessions"""

    def __init__(self, db: Session, app: App):
        self.db = db
        self.app = app

    def _top(self, column, *filters, limit: Optional[int] = TOP_LIMIT, model=Event) -> List[tuple]:
        query = (
            self.db.query(column, func.count().label("count"))
            .filter(model.app_id == self.app.id, *filters)
            .group_by(column)
            .order_by(func.count().desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_overview(self, range_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Dashboard overview for a date range.

        Args:
            range_key: One of DATE_RANGES; anything else falls back to 7d

        Returns:
            Overview counts, top lists, daily stats and recent events
        """
        if range_key not in DATE_RANGES:
            range_key = DEFAULT_RANGE
        start = datetime.now(timezone.utc) - DATE_RANGES[range_key]
        in_range = Event.created_at >= start
        base = self.db.query(Event).filter(Event.app_id == self.app.id, in_range)

        total_events = base.count()
        pageviews = base.filter(Event.event_name == "pageview").count()
        unique_visitors = (
            self.db.query(func.count(distinct(Event.fingerprint)))
            .filter(Event.app_id == self.app.id, in_range)
            .scalar()
        ) or 0
        sessions = (
            self.db.query(func.count(AnalyticsSession.id))
            .filter(AnalyticsSession.app_id == self.app.id, AnalyticsSession.start_time >= start)
            .scalar()
        ) or 0

        top_pages = self._top(Event.url, in_range, Event.event_name == "pageview", Event.url.isnot(None))
        top_referrers = self._top(Event.referrer, in_range)
        top_countries = self._top(Event.country, in_range, Event.country.isnot(None))
        top_browsers = self._top(Event.browser, in_range, Event.browser.isnot(None))
        device_types = self._top(Event.device_type, in_range, Event.device_type.isnot(None), limit=None)
        top_events = self._top(Event.event_name, in_range, Event.event_name != "pageview")

        daily = (
            self.db.query(DailyStats)
            .filter(DailyStats.app_id == self.app.id, DailyStats.date >= start.date())
            .order_by(DailyStats.date.asc())
            .all()
        )
        recent = (
            base.order_by(Event.created_at.desc(), Event.id.desc())
            .limit(RECENT_EVENTS_LIMIT)
            .all()
        )

        return {
            "app": {"id": str(self.app.id), "name": self.app.name, "appId": self.app.app_id},
            "range": range_key,
            "overview": {
                "totalEvents": total_events,
                "pageviews": pageviews,
                "uniqueVisitors": unique_visitors,
                "sessions": sessions,
            },
            "topPages": [{"url": url, "count": count} for url, count in top_pages],
            "topReferrers": [{"referrer": ref or "Direct", "count": count} for ref, count in top_referrers],
            "topCountries": [{"country": c, "count": count} for c, count in top_countries],
            "topBrowsers": [{"browser": b, "count": count} for b, count in top_browsers],
            "deviceTypes": [{"type": t, "count": count} for t, count in device_types],
            "topEvents": [{"event": name, "count": count} for name, count in top_events],
            "dailyStats": [
                {
                    "date": row.date.isoformat(),
                    "pageviews": row.pageviews,
                    "uniqueUsers": row.unique_users,
                    "sessions": row.sessions,
                }
                for row in daily
            ],
            "recentEvents": [
                EventResponse.model_validate(e).model_dump(mode="json", by_alias=True) for e in recent
            ],
        }

    def get_visitors(self) -> Dict[str, Any]:
        """Session-level visitor stats: live count, duration, bounce rate, breakdowns"""
        in_app = AnalyticsSession.app_id == self.app.id
        now = datetime.now(timezone.utc)

        sessions = (
            self.db.query(AnalyticsSession)
            .filter(in_app)
            .order_by(AnalyticsSession.start_time.desc())
            .limit(RECENT_SESSIONS_LIMIT)
            .all()
        )
        active_now = (
            self.db.query(func.count(AnalyticsSession.id))
            .filter(in_app, AnalyticsSession.last_seen >= now - ACTIVE_WINDOW)
            .scalar()
        ) or 0
        total_sessions = self.db.query(func.count(AnalyticsSession.id)).filter(in_app).scalar() or 0
        unique_visitors = (
            self.db.query(func.count(distinct(AnalyticsSession.fingerprint))).filter(in_app).scalar()
        ) or 0

        durations = [
            (_as_utc(last_seen) - _as_utc(start_time)).total_seconds()
            for start_time, last_seen in self.db.query(AnalyticsSession.start_time, AnalyticsSession.last_seen).filter(in_app)
        ]
        avg_duration = int(sum(durations) // len(durations)) if durations else 0

        bounced = (
            self.db.query(func.count(AnalyticsSession.id))
            .filter(in_app, AnalyticsSession.pageviews == 1)
            .scalar()
        ) or 0
        bounce_rate = (bounced / total_sessions) * 100 if total_sessions else 0

        top_countries = self._top(
            AnalyticsSession.country, AnalyticsSession.country.isnot(None), model=AnalyticsSession
        )
        device_breakdown = self._top(
            AnalyticsSession.device_type, AnalyticsSession.device_type.isnot(None),
            limit=None, model=AnalyticsSession,
        )

        return {
            "activeNow": active_now,
            "totalSessions": total_sessions,
            "uniqueVisitors": unique_visitors,
            "avgDuration": avg_duration,
            "bounceRate": bounce_rate,
            "sessions": [
                {
                    "id": str(s.id),
                    "sessionId": s.session_id,
                    "browser": s.browser,
                    "os": s.os,
                    "deviceType": s.device_type,
                    "country": s.country,
                    "pageviews": s.pageviews,
                    "startTime": s.start_time.isoformat() if s.start_time else None,
                    "lastSeen": s.last_seen.isoformat() if s.last_seen else None,
                }
                for s in sessions
            ],
            "topCountries": [{"country": c, "count": count} for c, count in top_countries],
            "deviceBreakdown": [{"type": t, "count": count} for t, count in device_breakdown],
        }
