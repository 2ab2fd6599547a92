# ============================================================================
# FILE: app/schemas/history.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from app.schemas.catalog import CatalogAlbum, CatalogPlaylist, CatalogTrack

class PlayEvent(BaseModel):
    """A track the user started playing from the library"""
    title: str
    artist: str
    genre: Optional[str] = None

class ListeningHistoryResponse(BaseModel):
    id: int
    username: str
    song_title: Optional[str] = None
    artist: str
    genre: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True

class PlayRecorded(BaseModel):
    recorded: bool
    entry: Optional[ListeningHistoryResponse] = None

class HomeDashboard(BaseModel):
    """Everything the home view shows for one user"""
    recently_played: List[CatalogTrack] = []
    recommended_tracks: List[CatalogTrack] = []
    new_releases: List[CatalogAlbum] = []
    featured_playlists: List[CatalogPlaylist] = []
    top_artists: List[str] = []
    top_genres: List[str] = []
