"""
Application configuration using Pydantic Settings
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # App
    APP_NAME: str = "Pixel Analytics"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # Public base URL, baked into the pixel script served to storefronts
    APP_URL: str = Field(default="http://localhost:8000", env="APP_URL")

    # CORS (the pixel posts from arbitrary storefront origins)
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./pixeltrack.db", env="DATABASE_URL")

    # Redis (geo lookup cache)
    REDIS_URL: str = Field(default="redis://localhost:6379", env="REDIS_URL")

    # Security
    SECRET_KEY: str = Field(default="change-me", env="SECRET_KEY")

    # Shopify
    SHOPIFY_API_KEY: str | None = Field(default=None, env="SHOPIFY_API_KEY")
    SHOPIFY_API_SECRET: str | None = Field(default=None, env="SHOPIFY_API_SECRET")

    # Meta / Facebook
    FACEBOOK_APP_ID: str | None = Field(default=None, env="FACEBOOK_APP_ID")
    FACEBOOK_APP_SECRET: str | None = Field(default=None, env="FACEBOOK_APP_SECRET")
    META_GRAPH_API_URL: str = "https://graph.facebook.com"
    META_GRAPH_API_VERSION: str = "v18.0"

    # Geo lookup (ip-api free tier: 45 requests/minute)
    GEO_API_URL: str = "http://ip-api.com/json"
    GEO_CACHE_TTL: int = 3600

    # Outbound HTTP timeout, seconds
    HTTP_TIMEOUT: float = 10.0

    # Rate limiting for the ingestion endpoint
    RATE_LIMIT_ENABLED: bool = True
    TRACK_RATE_LIMIT: str = "120/minute"

    # Server port, set by the hosting platform
    PORT: int = Field(default=8000, env="PORT")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
