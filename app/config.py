# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Music Streaming Companion"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./music_app.db"  # Change to PostgreSQL in production

    # Redis cache
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_EXPIRE_SECONDS: int = 3600

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Catalog provider (client credentials flow)
    CATALOG_CLIENT_ID: str = ""
    CATALOG_CLIENT_SECRET: str = ""
    CATALOG_TOKEN_URL: str = "https://accounts.spotify.com/api/token"
    CATALOG_API_URL: str = "https://api.spotify.com/v1"
    CATALOG_TIMEOUT_SECONDS: float = 10.0
    CATALOG_SEARCH_LIMIT: int = 10
    CATALOG_NEW_RELEASES_LIMIT: int = 30
    CATALOG_CATEGORIES_LIMIT: int = 50
    CATALOG_FEATURED_LIMIT: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
