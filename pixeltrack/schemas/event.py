"""
Pydantic schemas for Event API
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from uuid import UUID
from datetime import datetime


class EventResponse(BaseModel):
    """Public projection of an event. Internal keys (app_id, ip_address) are not exposed."""
    id: UUID
    event_name: str = Field(serialization_alias="eventName")
    url: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    browser: Optional[str] = None
    device_type: Optional[str] = Field(default=None, serialization_alias="deviceType")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        from_attributes = True


class EventPage(BaseModel):
    """One page of events plus the total matching count"""
    events: List[EventResponse]
    total: int


class TrackRequest(BaseModel):
    """Payload posted by the pixel script"""
    app_id: Optional[str] = Field(default=None, alias="appId")
    event_name: Optional[str] = Field(default=None, alias="eventName")
    url: Optional[str] = None
    referrer: Optional[str] = None
    page_title: Optional[str] = Field(default=None, alias="pageTitle")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    visitor_id: Optional[str] = Field(default=None, alias="visitorId")
    fingerprint: Optional[str] = None

    screen_width: Optional[int] = Field(default=None, alias="screenWidth")
    screen_height: Optional[int] = Field(default=None, alias="screenHeight")
    language: Optional[str] = None

    utm_source: Optional[str] = Field(default=None, alias="utmSource")
    utm_medium: Optional[str] = Field(default=None, alias="utmMedium")
    utm_campaign: Optional[str] = Field(default=None, alias="utmCampaign")
    utm_term: Optional[str] = Field(default=None, alias="utmTerm")
    utm_content: Optional[str] = Field(default=None, alias="utmContent")

    value: Optional[float] = None
    currency: Optional[str] = None
    product_id: Optional[str] = Field(default=None, alias="productId")
    product_name: Optional[str] = Field(default=None, alias="productName")
    quantity: Optional[int] = None

    # Hashed before forwarding to Meta, never stored
    email: Optional[str] = None
    phone: Optional[str] = None
    fbc: Optional[str] = None
    fbp: Optional[str] = None

    properties: Optional[Dict[str, Any]] = None

    class Config:
        populate_by_name = True


class TrackResponse(BaseModel):
    success: bool
    event_id: Optional[UUID] = Field(default=None, serialization_alias="eventId")


class CustomEventResponse(BaseModel):
    id: UUID
    name: str
    display_name: str = Field(serialization_alias="displayName")
    description: Optional[str] = None
    selector: Optional[str] = None
    event_type: str = Field(serialization_alias="eventType")
    meta_event_name: Optional[str] = Field(default=None, serialization_alias="metaEventName")
    has_product_id: bool = Field(serialization_alias="hasProductId")
    is_active: bool = Field(serialization_alias="isActive")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        from_attributes = True
