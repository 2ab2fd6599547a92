# ============================================================================
# FILE: app/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_current_user
from app.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
    PlaylistSongAdd,
    PlaylistSongResponse,
    SongReorder,
)
from app.services.playlist_service import playlist_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/my-playlists", response_model=List[PlaylistResponse])
def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists for the current user
    Requires authentication
    """
    return playlist_service.get_user_playlists(db, current_user.id)

@router.post("/create", response_model=PlaylistResponse)
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    try:
        return playlist_service.create_playlist(db, current_user.id, playlist_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create playlist")

@router.delete("/songs/by-title")
def delete_song_everywhere(
    title: str = Query(...),
    artist: str = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a song from all of the current user's playlists
    """
    removed = playlist_service.delete_song_by_title_and_artist(db, current_user.id, title, artist)
    return {"message": "Song removed from playlists", "removed": removed}

@router.get("/{playlist_id}", response_model=PlaylistResponse)
def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get a specific playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.get_playlist(db, playlist_id, current_user.id)
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return playlist

@router.put("/{playlist_id}", response_model=PlaylistResponse)
def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Rename a playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.update_playlist(db, playlist_id, current_user.id, update_data)
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return playlist

@router.delete("/{playlist_id}")
def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist and all of its songs
    Requires authentication and ownership
    """
    if not playlist_service.delete_playlist(db, playlist_id, current_user.id):
        raise HTTPException(status_code=404, detail="Playlist not found")
    return {"message": "Playlist deleted successfully"}

@router.get("/{playlist_id}/songs", response_model=List[PlaylistSongResponse])
def get_playlist_songs(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Songs of a playlist in track order"""
    return playlist_service.get_songs(db, playlist_id, current_user.id)

@router.post("/{playlist_id}/add-song", response_model=PlaylistSongResponse)
def add_song_to_playlist(
    playlist_id: int,
    song_data: PlaylistSongAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Append a song to a playlist
    Requires authentication and ownership
    """
    return playlist_service.add_song_to_playlist(db, playlist_id, current_user.id, song_data)

@router.delete("/{playlist_id}/songs/{song_id}", response_model=List[PlaylistSongResponse])
def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a song from a playlist; returns the remaining songs
    Requires authentication and ownership
    """
    return playlist_service.remove_song(db, playlist_id, current_user.id, song_id)

@router.put("/{playlist_id}/songs/{song_id}/position", response_model=List[PlaylistSongResponse])
def reorder_song(
    playlist_id: int,
    song_id: int,
    reorder: SongReorder,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Move a song to a new zero-based position; returns the reordered songs
    Requires authentication and ownership
    """
    return playlist_service.reorder_song(db, playlist_id, current_user.id, song_id, reorder.position)
