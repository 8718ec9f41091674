"""
Visitor session and daily rollup models
"""
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, UniqueConstraint, Uuid, Text
from sqlalchemy.sql import func
import uuid

from pixeltrack.core.database import Base


class AnalyticsSession(Base):
    """A storefront browsing session, keyed by the pixel's session id"""

    __tablename__ = "analytics_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(Uuid, ForeignKey("apps.id"), nullable=False, index=True)
    session_id = Column(String(100), unique=True, nullable=False)
    fingerprint = Column(String(200), nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    browser = Column(String(100), nullable=True)
    os = Column(String(100), nullable=True)
    device_type = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)
    pageviews = Column(Integer, default=0, nullable=False)
    start_time = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_seen = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<AnalyticsSession(session_id={self.session_id}, pageviews={self.pageviews})>"


class DailyStats(Base):
    """Per-app daily pageview rollup"""

    __tablename__ = "daily_stats"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(Uuid, ForeignKey("apps.id"), nullable=False)
    date = Column(Date, nullable=False)
    pageviews = Column(Integer, default=0, nullable=False)
    unique_users = Column(Integer, default=0, nullable=False)
    sessions = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("app_id", "date", name="uq_daily_stats_app_date"),
    )

    def __repr__(self):
        return f"<DailyStats(app_id={self.app_id}, date={self.date}, pageviews={self.pageviews})>"
