"""
FastAPI application entry point
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time

from pixeltrack import __version__
from pixeltrack.core.config import settings
from pixeltrack.core.database import engine, Base
from pixeltrack.core.errors import PixelTrackError
from pixeltrack.core.logging_config import setup_logging
from pixeltrack.core.health import get_health_status
from pixeltrack.core.monitoring import track_error
from pixeltrack.core.rate_limit import limiter
from pixeltrack.core.redis import cache

# Register all models on Base.metadata
from pixeltrack import models  # noqa: F401

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Pixel analytics backend: event ingestion, queries and app management",
    version=__version__,
)

app.state.limiter = limiter

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    """Initialize database and cache on startup"""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Migrations own the schema in production; this covers fresh local databases
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")

    cache.connect()

    health = await get_health_status()
    if health["status"] == "healthy":
        logger.info("All systems healthy")
    else:
        logger.warning(f"Health check issues: {health}")


@app.on_event("shutdown")
async def shutdown():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}...")
    cache.disconnect()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "status": "running"
    }


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests"""
    start_time = time.time()

    logger.info(f"{request.method} {request.url.path} - {request.client.host if request.client else 'unknown'}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s"
        )

        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.3f}s",
            exc_info=True
        )
        raise


# Exception handlers. Every error body is {"error": message}.
@app.exception_handler(PixelTrackError)
async def pixeltrack_error_handler(request: Request, exc: PixelTrackError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}", exc_info=exc)
        track_error(type(exc).__name__, metadata={"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"Invalid parameter: {field}" if field else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Method not allowed"},
            headers=exc.headers,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded: {request.url.path} - {exc.detail}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=True)
    track_error("DatabaseError", metadata={"path": request.url.path})
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal error"})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal error"}
    )


# Include routers
from pixeltrack.api.v1 import api_router, root_router  # noqa: E402

app.include_router(api_router, prefix="/api")
app.include_router(root_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pixeltrack.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
