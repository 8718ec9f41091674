"""
App model - a registered pixel/tenant, plus its per-app settings
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from pixeltrack.core.database import Base


class App(Base):
    """App model. `app_id` is the public token embedded in storefront script tags."""

    __tablename__ = "apps"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(String(200), nullable=False, index=True)  # Owning merchant (shop domain)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    settings = relationship("AppSettings", back_populates="app", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<App(id={self.id}, app_id={self.app_id}, name={self.name})>"


class AppSettings(Base):
    """Tracking and Meta integration settings, one row per app"""

    __tablename__ = "app_settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    app_id = Column(Uuid, ForeignKey("apps.id"), unique=True, nullable=False)

    # Meta (Facebook) pixel / Conversions API
    meta_pixel_id = Column(String(100), nullable=True)
    meta_access_token = Column(String(1000), nullable=True)  # Fernet-encrypted
    meta_test_event_code = Column(String(100), nullable=True)
    meta_pixel_enabled = Column(Boolean, default=False, nullable=False)
    meta_verified = Column(Boolean, default=False, nullable=False)

    # Pixel behaviour
    auto_track_pageviews = Column(Boolean, default=True, nullable=False)
    auto_track_clicks = Column(Boolean, default=True, nullable=False)
    auto_track_scroll = Column(Boolean, default=False, nullable=False)

    # Privacy
    record_ip = Column(Boolean, default=True, nullable=False)
    record_location = Column(Boolean, default=True, nullable=False)
    record_session = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    app = relationship("App", back_populates="settings")

    @property
    def has_meta_access_token(self) -> bool:
        return bool(self.meta_access_token)

    def __repr__(self):
        return f"<AppSettings(app_id={self.app_id}, meta_enabled={self.meta_pixel_enabled})>"
