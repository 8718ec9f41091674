"""
App management endpoints.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from pixeltrack.core.database import get_db
from pixeltrack.core.errors import ValidationError
from pixeltrack.schemas.app import (
    AppCreate,
    AppRename,
    AppSettingsUpdate,
    AppResponse,
    AppListResponse,
    AppCreatedResponse,
    AppSettingsResponse,
)
from pixeltrack.services.app_service import AppService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/apps", response_model=AppListResponse)
async def list_apps(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """
    List apps owned by a user, newest first.

    Args:
        user_id: Owner id (required)
        db: Database session

    Returns:
        {"apps": [...]} with settings and event counts
    """
    if not user_id:
        raise ValidationError("User ID required")

    return {"apps": AppService(db).get_user_apps(user_id)}


@router.post("/apps", response_model=AppCreatedResponse)
async def create_app(
    app_data: AppCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new app together with its settings.
    Meta tracking is enabled only when both Meta app id and token are given.

    Args:
        app_data: userId and name required; metaAppId, metaAccessToken optional
        db: Database session

    Returns:
        {"app": ..., "settings": ...}
    """
    app = AppService(db).create_app_with_settings(
        user_id=app_data.user_id,
        name=app_data.name,
        meta_app_id=app_data.meta_app_id,
        meta_access_token=app_data.meta_access_token,
    )
    return {"app": app, "settings": app.settings}


@router.patch("/apps/{id}", response_model=AppResponse)
async def rename_app(
    id: UUID,
    app_data: AppRename,
    db: Session = Depends(get_db)
):
    """Rename an app"""
    return AppService(db).rename_app(id, app_data.name)


@router.delete("/apps/{id}")
async def delete_app(
    id: UUID,
    db: Session = Depends(get_db)
):
    """
    Delete an app and all of its events, sessions, stats and custom events.
    This cannot be undone.
    """
    return AppService(db).delete_app_with_data(id)


@router.patch("/apps/{id}/settings", response_model=AppSettingsResponse)
async def update_app_settings(
    id: UUID,
    settings_data: AppSettingsUpdate,
    db: Session = Depends(get_db)
):
    """Update tracking/Meta settings. Only fields present in the body change."""
    return AppService(db).update_app_settings(id, settings_data.model_dump(exclude_unset=True))
