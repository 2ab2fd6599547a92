# ============================================================================
# FILE: app/api/v1/endpoints/library.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.catalog import CatalogAlbum, CatalogArtist, CatalogCategory, LibraryItem
from app.schemas.history import ListeningHistoryResponse, PlayEvent, PlayRecorded
from app.services.catalog_service import catalog_service
from app.services.recommendation_service import recommendation_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[LibraryItem])
def browse_library(
    query: Optional[str] = Query(None, description="Free-text search"),
    type: str = Query("track", pattern="^(track|album|artist)$", description="Search type"),
    min_popularity: Optional[int] = Query(None, ge=0, le=100, description="Minimum popularity"),
    released_from: Optional[date] = Query(None, description="Earliest release date"),
    released_to: Optional[date] = Query(None, description="Latest release date"),
    genre: Optional[str] = Query(None, description="Genre (category name or id)"),
    offset: int = Query(0, ge=0, description="New releases page offset"),
    current_user: User = Depends(require_current_user)
):
    """
    Library listing with filters
    A genre lists that category's playlists, a query searches the catalog,
    and with neither the latest releases are shown
    """
    if released_from and released_to and released_from > released_to:
        raise HTTPException(status_code=400, detail="released_from must not be after released_to")

    return catalog_service.browse(
        query=query,
        search_type=type,
        min_popularity=min_popularity,
        released_from=released_from,
        released_to=released_to,
        genre=genre,
        offset=offset,
    )

@router.get("/genres", response_model=List[CatalogCategory])
def get_genres(current_user: User = Depends(require_current_user)):
    """Genres available for filtering"""
    return catalog_service.get_genres()

@router.get("/new-releases", response_model=List[CatalogAlbum])
def get_new_releases(
    offset: int = Query(0, ge=0),
    current_user: User = Depends(require_current_user)
):
    return catalog_service.get_new_releases(offset)

@router.get("/popular-artists", response_model=List[CatalogArtist])
def get_popular_artists(
    count: int = Query(5, ge=1, le=8),
    current_user: User = Depends(require_current_user)
):
    return catalog_service.popular_artists(count)

@router.get("/artist/{artist_id}", response_model=CatalogArtist)
def get_artist(
    artist_id: str,
    current_user: User = Depends(require_current_user)
):
    artist = catalog_service.get_artist(artist_id)
    if not artist:
        raise HTTPException(status_code=404, detail="Artist not found")
    return artist

@router.get("/artist/{artist_id}/related", response_model=List[CatalogArtist])
def get_related_artists(
    artist_id: str,
    current_user: User = Depends(require_current_user)
):
    return catalog_service.get_related_artists(artist_id)

@router.post("/play", response_model=PlayRecorded)
def record_play(
    event: PlayEvent,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Record that the current user played a track
    Only the first play per artist is kept
    """
    entry = recommendation_service.track_play(
        db, current_user.username, event.artist, event.title, event.genre
    )
    return PlayRecorded(
        recorded=entry is not None,
        entry=ListeningHistoryResponse.model_validate(entry) if entry else None,
    )
