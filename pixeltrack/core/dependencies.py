"""
FastAPI dependencies for app-scoped (multi-tenant) endpoints
"""
from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from pixeltrack.core.database import get_db
from pixeltrack.models.app import App
from pixeltrack.services.app_service import AppService


def get_app_from_query(
    app_id: Optional[str] = Query(None, alias="appId"),
    db: Session = Depends(get_db)
) -> App:
    """
    Resolve the `appId` query parameter to an App.

    Raises:
        ValidationError: appId missing (400)
        AppNotFoundError: unknown appId (404)
    """
    return AppService(db).get_app_by_app_id(app_id)


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "0.0.0.0"
