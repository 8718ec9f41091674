"""
Pydantic schemas for App API
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime


class AppCreate(BaseModel):
    """Schema for creating an app. Required fields are checked by the service."""
    user_id: Optional[str] = Field(default=None, alias="userId")
    name: Optional[str] = None
    meta_app_id: Optional[str] = Field(default=None, alias="metaAppId")
    meta_access_token: Optional[str] = Field(default=None, alias="metaAccessToken")

    class Config:
        populate_by_name = True


class AppRename(BaseModel):
    name: Optional[str] = None


class AppSettingsUpdate(BaseModel):
    """Partial settings update; only fields present in the body are written"""
    auto_track_pageviews: Optional[bool] = Field(default=None, alias="autoTrackPageviews")
    auto_track_clicks: Optional[bool] = Field(default=None, alias="autoTrackClicks")
    auto_track_scroll: Optional[bool] = Field(default=None, alias="autoTrackScroll")
    record_ip: Optional[bool] = Field(default=None, alias="recordIp")
    record_location: Optional[bool] = Field(default=None, alias="recordLocation")
    record_session: Optional[bool] = Field(default=None, alias="recordSession")
    meta_pixel_id: Optional[str] = Field(default=None, alias="metaPixelId")
    meta_access_token: Optional[str] = Field(default=None, alias="metaAccessToken")
    meta_test_event_code: Optional[str] = Field(default=None, alias="metaTestEventCode")
    meta_pixel_enabled: Optional[bool] = Field(default=None, alias="metaPixelEnabled")
    meta_verified: Optional[bool] = Field(default=None, alias="metaVerified")

    class Config:
        populate_by_name = True


class AppSettingsResponse(BaseModel):
    """Settings as returned to the admin. The access token itself is never serialized."""
    id: UUID
    meta_pixel_id: Optional[str] = Field(default=None, serialization_alias="metaPixelId")
    has_meta_access_token: bool = Field(serialization_alias="hasMetaAccessToken")
    meta_test_event_code: Optional[str] = Field(default=None, serialization_alias="metaTestEventCode")
    meta_pixel_enabled: bool = Field(serialization_alias="metaPixelEnabled")
    meta_verified: bool = Field(serialization_alias="metaVerified")
    auto_track_pageviews: bool = Field(serialization_alias="autoTrackPageviews")
    auto_track_clicks: bool = Field(serialization_alias="autoTrackClicks")
    auto_track_scroll: bool = Field(serialization_alias="autoTrackScroll")
    record_ip: bool = Field(serialization_alias="recordIp")
    record_location: bool = Field(serialization_alias="recordLocation")
    record_session: bool = Field(serialization_alias="recordSession")

    class Config:
        from_attributes = True


class AppResponse(BaseModel):
    """Schema for app response"""
    id: UUID
    app_id: str = Field(serialization_alias="appId")
    user_id: str = Field(serialization_alias="userId")
    name: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class AppDetailResponse(AppResponse):
    """App with its settings and stored event count, used by the list endpoint"""
    settings: Optional[AppSettingsResponse] = None
    event_count: int = Field(default=0, serialization_alias="eventCount")


class AppListResponse(BaseModel):
    apps: List[AppDetailResponse]


class AppCreatedResponse(BaseModel):
    app: AppResponse
    settings: AppSettingsResponse
