
# ============================================================================
# FILE: app/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str

class PlaylistUpdate(BaseModel):
    """Schema for renaming a playlist"""
    name: Optional[str] = None

class PlaylistSongAdd(BaseModel):
    """Schema for adding a catalog song to a playlist"""
    title: str
    artist: str
    external_url: Optional[str] = None
    cover_image: Optional[str] = None

class SongReorder(BaseModel):
    """Target zero-based position; out-of-range values are clamped"""
    position: int

class PlaylistSongResponse(BaseModel):
    """Schema for playlist song response"""
    id: int
    title: str
    artist: str
    external_url: Optional[str] = None
    cover_image: Optional[str] = None
    track_order: int

    class Config:
        from_attributes = True

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    songs: List[PlaylistSongResponse] = []

    class Config:
        from_attributes = True
