# ============================================================================
# FILE: app/api/v1/endpoints/home.py
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.history import HomeDashboard
from app.services.recommendation_service import recommendation_service
from app.db.models.user import User

router = APIRouter()

@router.get("", response_model=HomeDashboard)
def get_home(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Home dashboard: recently played, recommendations, new releases,
    featured playlists and the user's top artists and genres
    """
    return recommendation_service.build_dashboard(db, current_user.username)

@router.get("/top-artists", response_model=List[str])
def get_top_artists(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return recommendation_service.top_artists(db, current_user.username, limit)

@router.get("/top-genres", response_model=List[str])
def get_top_genres(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return recommendation_service.top_genres(db, current_user.username, limit)
