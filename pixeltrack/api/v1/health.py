"""
Health endpoints.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pixeltrack.core.config import settings
from pixeltrack.core.health import get_health_status, check_database, get_config_status

router = APIRouter()


@router.get("/health")
async def health():
    """
    Health check endpoint.
    Returns status of all components.
    """
    return await get_health_status()


@router.get("/health/ready")
async def readiness():
    """
    Readiness probe for load balancers and orchestrators.
    Returns 200 if ready to accept traffic.
    """
    health_status = await get_health_status()

    if health_status["status"] == "healthy":
        return JSONResponse(content=health_status, status_code=status.HTTP_200_OK)
    return JSONResponse(content=health_status, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/health/live")
async def liveness():
    """
    Liveness probe for load balancers and orchestrators.
    Returns 200 if application is alive.
    """
    return {"status": "alive"}


@router.get("/api/health")
async def api_health():
    """Configuration presence and database status, for deployment checks"""
    database = await check_database()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": {
            "environment": settings.ENVIRONMENT,
            **get_config_status(),
        },
        "services": {
            "database": "connected" if database["status"] == "healthy" else "error",
        },
    }
