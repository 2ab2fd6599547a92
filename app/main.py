# ============================================================================
# FILE: app/main.py
# ============================================================================
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.router import api_router
from app.core.cache import cache
from app.core.logging import setup_logging
from app.config import settings
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Catalog browsing, personal playlists and listening-history recommendations",
    version="1.0.0",
    debug=settings.DEBUG,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API v1 router
app.include_router(api_router, prefix="/api/v1")

@app.on_event("startup")
def startup_event():
    """Create tables on startup"""
    logger.info(f"Starting {settings.APP_NAME}")
    from app.db.base import Base
    from app.db.models import history, playlist, user  # noqa: F401
    from app.db.session import engine
    Base.metadata.create_all(bind=engine)

@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    from app.core.catalog_client import catalog_client
    catalog_client.close()
    logger.info(f"Shutting down {settings.APP_NAME}")

@app.get("/health")
async def health_check():
    return {"status": "healthy", "cache": "enabled" if cache.available else "disabled"}

@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": "1.0.0", "docs": "/docs"}
