"""
Health check utilities
"""
from typing import Dict, Any
from sqlalchemy import text

from pixeltrack import __version__
from pixeltrack.core.database import SessionLocal
from pixeltrack.core.config import settings
from pixeltrack.core.redis import cache
import logging

logger = logging.getLogger(__name__)


async def check_database() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dictionary with status and details
    """
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            return {
                "status": "healthy",
                "message": "Database connection successful"
            }
        finally:
            db.close()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "message": "Database connection failed"
        }


async def check_redis() -> Dict[str, Any]:
    """Redis is optional; an unreachable cache only degrades geo lookups."""
    if cache.is_connected:
        return {"status": "healthy", "message": "Redis connection successful"}
    return {"status": "unavailable", "message": "Redis not connected, caching disabled"}


async def get_health_status() -> Dict[str, Any]:
    """
    Get overall health status.

    Returns:
        Dictionary with health status of all components
    """
    db_status = await check_database()
    redis_status = await check_redis()

    overall_status = "healthy"
    if db_status["status"] != "healthy":
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "components": {
            "database": db_status,
            "redis": redis_status,
        }
    }


def get_config_status() -> Dict[str, bool]:
    """Which integrations are configured. Presence flags only, never values."""
    return {
        "hasShopifyApiKey": bool(settings.SHOPIFY_API_KEY),
        "hasShopifyApiSecret": bool(settings.SHOPIFY_API_SECRET),
        "hasDatabase": bool(settings.DATABASE_URL),
        "hasAppUrl": bool(settings.APP_URL),
        "hasFacebookApp": bool(settings.FACEBOOK_APP_ID and settings.FACEBOOK_APP_SECRET),
    }
