"""
HTTP API.

Modular structure:
- events.py: paginated event queries
- apps.py: app CRUD
- facebook.py: Meta OAuth code exchange and credential validation
- track.py: event ingestion from the pixel
- analytics.py: dashboard reports (analytics, visitors, custom events)
- pixel.py: pixel script and legacy redirect (site root)
- health.py: health probes (site root)
"""
from fastapi import APIRouter

from .events import router as events_router
from .apps import router as apps_router
from .facebook import router as facebook_router
from .track import router as track_router
from .analytics import router as analytics_router
from .pixel import router as pixel_router
from .health import router as health_router

# Mounted under /api
api_router = APIRouter()
api_router.include_router(events_router, tags=["events"])
api_router.include_router(apps_router, tags=["apps"])
api_router.include_router(facebook_router, tags=["facebook"])
api_router.include_router(track_router, tags=["track"])
api_router.include_router(analytics_router, tags=["analytics"])

# Mounted at the site root
root_router = APIRouter()
root_router.include_router(pixel_router, tags=["pixel"])
root_router.include_router(health_router, tags=["health"])

__all__ = ["api_router", "root_router"]
