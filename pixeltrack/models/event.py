"""
Event model - stores events sent by the tracking pixel
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, JSON, ForeignKey, Index, Uuid, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from pixeltrack.core.database import Base


class Event(Base):
    """Event model - one row per tracked occurrence, always scoped to an app"""

    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(Uuid, ForeignKey("apps.id"), nullable=False, index=True)
    event_name = Column(String(100), nullable=False, index=True)  # e.g. "pageview", "add_to_cart"

    # Page
    url = Column(Text, nullable=True)
    referrer = Column(Text, nullable=True)
    page_title = Column(String(500), nullable=True)

    # Visitor
    session_id = Column(String(100), nullable=True, index=True)
    fingerprint = Column(String(200), nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)

    # Device
    browser = Column(String(100), nullable=True)
    browser_version = Column(String(50), nullable=True)
    os = Column(String(100), nullable=True)
    os_version = Column(String(50), nullable=True)
    device_type = Column(String(20), nullable=True)  # desktop, mobile, tablet
    screen_width = Column(Integer, nullable=True)
    screen_height = Column(Integer, nullable=True)

    # Geo
    city = Column(String(100), nullable=True)
    region = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    country_code = Column(String(10), nullable=True)
    timezone = Column(String(64), nullable=True)

    # UTM
    utm_source = Column(String(200), nullable=True)
    utm_medium = Column(String(200), nullable=True)
    utm_campaign = Column(String(200), nullable=True)
    utm_term = Column(String(200), nullable=True)
    utm_content = Column(String(200), nullable=True)

    # E-commerce
    value = Column(Float, nullable=True)
    currency = Column(String(10), nullable=True)
    product_id = Column(String(100), nullable=True)
    product_name = Column(String(500), nullable=True)
    quantity = Column(Integer, nullable=True)

    custom_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    app = relationship("App", backref="events")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_events_app_name", "app_id", "event_name"),
        Index("idx_events_app_date", "app_id", "created_at"),
    )

    def __repr__(self):
        return f"<Event(id={self.id}, app_id={self.app_id}, event={self.event_name}, created_at={self.created_at})>"
