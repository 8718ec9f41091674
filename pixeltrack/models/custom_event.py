"""
Custom event model - merchant-defined events the pixel auto-tracks by CSS selector
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid, Text
from sqlalchemy.sql import func
import uuid

from pixeltrack.core.database import Base


class CustomEvent(Base):

    __tablename__ = "custom_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(Uuid, ForeignKey("apps.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    display_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    selector = Column(String(500), nullable=True)  # CSS selector, e.g. ".add-to-cart"
    event_type = Column(String(50), default="click", nullable=False)  # click, submit, change
    meta_event_name = Column(String(100), nullable=True)  # e.g. "AddToCart"
    has_product_id = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<CustomEvent(name={self.name}, app_id={self.app_id})>"
