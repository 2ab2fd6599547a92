# ============================================================================
# FILE: app/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from app.api.v1.endpoints import home, library, playlist, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(user.router, prefix="/user", tags=["user"])
api_router.include_router(home.router, prefix="/home", tags=["home"])
api_router.include_router(library.router, prefix="/library", tags=["library"])
api_router.include_router(playlist.router, prefix="/playlist", tags=["playlist"])
