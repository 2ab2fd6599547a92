# ============================================================================
# FILE: app/services/playlist_service.py
# ============================================================================
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload
from app.db.models.playlist import Playlist, PlaylistSong
from app.schemas.playlist import PlaylistCreate, PlaylistUpdate, PlaylistSongAdd
import logging

logger = logging.getLogger(__name__)

def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Playlist name cannot be blank."
        )
    return cleaned

def _renumber(songs: List[PlaylistSong]) -> List[PlaylistSong]:
    for index, song in enumerate(songs):
        song.track_order = index
    return songs

class PlaylistService:
    """
    Service layer for playlist operations

    Songs inside a playlist always carry track_order 0..N-1 in playlist
    order; every operation that adds, removes or moves a song restores that.
    """

    def create_playlist(self, db: Session, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user"""
        name = _clean_name(playlist_data.name)
        try:
            playlist = Playlist(user_id=user_id, name=name)
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def get_user_playlists(self, db: Session, user_id: int) -> List[Playlist]:
        """Get all playlists for a user, songs loaded in track order"""
        return (
            db.query(Playlist)
            .options(selectinload(Playlist.songs))
            .filter(Playlist.user_id == user_id)
            .order_by(Playlist.id)
            .all()
        )

    def get_playlist(self, db: Session, playlist_id: int, user_id: int) -> Optional[Playlist]:
        """Get a specific playlist (verify ownership)"""
        return db.query(Playlist).filter(
            Playlist.id == playlist_id,
            Playlist.user_id == user_id
        ).first()

    def _require_playlist(self, db: Session, playlist_id: int, user_id: int) -> Playlist:
        playlist = self.get_playlist(db, playlist_id, user_id)
        if not playlist:
            raise HTTPException(status_code=404, detail="Playlist not found")
        return playlist

    def get_songs(self, db: Session, playlist_id: int, user_id: int) -> List[PlaylistSong]:
        """Songs of a playlist ordered by track_order"""
        self._require_playlist(db, playlist_id, user_id)
        return self._ordered_songs(db, playlist_id)

    def _ordered_songs(self, db: Session, playlist_id: int) -> List[PlaylistSong]:
        return (
            db.query(PlaylistSong)
            .filter(PlaylistSong.playlist_id == playlist_id)
            .order_by(PlaylistSong.track_order, PlaylistSong.id)
            .all()
        )

    def update_playlist(self, db: Session, playlist_id: int, user_id: int, update_data: PlaylistUpdate) -> Optional[Playlist]:
        """Rename a playlist"""
        playlist = self.get_playlist(db, playlist_id, user_id)
        if not playlist:
            return None

        if update_data.name is not None:
            playlist.name = _clean_name(update_data.name)

        try:
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist updated: {playlist_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise

    def delete_playlist(self, db: Session, playlist_id: int, user_id: int) -> bool:
        """Delete a playlist together with its songs"""
        playlist = self.get_playlist(db, playlist_id, user_id)
        if not playlist:
            return False

        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise

    def add_song_to_playlist(self, db: Session, playlist_id: int, user_id: int, song_data: PlaylistSongAdd) -> PlaylistSong:
        """Append a song at the end of a playlist"""
        playlist = self._require_playlist(db, playlist_id, user_id)

        title = (song_data.title or "").strip()
        artist = (song_data.artist or "").strip()
        if not title or not artist:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Song title and artist are required."
            )

        try:
            position = db.query(PlaylistSong).filter(PlaylistSong.playlist_id == playlist.id).count()
            song = PlaylistSong(
                playlist_id=playlist.id,
                title=title,
                artist=artist,
                external_url=song_data.external_url,
                cover_image=song_data.cover_image,
                track_order=position,
            )
            db.add(song)
            db.commit()
            db.refresh(song)
            logger.info(f"Song added to playlist {playlist_id} at {position}: {title} - {artist}")
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding song to playlist: {e}")
            raise

    def remove_song(self, db: Session, playlist_id: int, user_id: int, song_id: int) -> List[PlaylistSong]:
        """Remove a song and close the gap it leaves in the track order"""
        self._require_playlist(db, playlist_id, user_id)
        songs = self._ordered_songs(db, playlist_id)
        song = next((s for s in songs if s.id == song_id), None)
        if song is None:
            raise HTTPException(status_code=404, detail="Song not found in playlist")

        try:
            songs.remove(song)
            db.delete(song)
            _renumber(songs)
            db.commit()
            logger.info(f"Song {song_id} removed from playlist {playlist_id}")
            return songs
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing song from playlist: {e}")
            raise

    def delete_song_by_title_and_artist(self, db: Session, user_id: int, title: str, artist: str) -> int:
        """Remove a song from every playlist of the user; returns rows deleted"""
        matches = (
            db.query(PlaylistSong)
            .join(Playlist)
            .filter(
                Playlist.user_id == user_id,
                PlaylistSong.title == title,
                PlaylistSong.artist == artist,
            )
            .all()
        )
        if not matches:
            return 0

        try:
            affected = {song.playlist_id for song in matches}
            for song in matches:
                db.delete(song)
            db.flush()
            for playlist_id in affected:
                _renumber(self._ordered_songs(db, playlist_id))
            db.commit()
            logger.info(f"Removed {len(matches)} copies of {title} - {artist} for user {user_id}")
            return len(matches)
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song by title and artist: {e}")
            raise

    def reorder_song(self, db: Session, playlist_id: int, user_id: int, song_id: int, new_position: int) -> List[PlaylistSong]:
        """
        Move a song to `new_position` and renumber the playlist 0..N-1

        Positions outside the playlist are clamped: anything below zero moves
        the song first, anything past the end moves it last.
        Raises 404 when the song is not in the playlist (including when the
        playlist is empty).
        """
        self._require_playlist(db, playlist_id, user_id)
        songs = self._ordered_songs(db, playlist_id)
        moved = next((s for s in songs if s.id == song_id), None)
        if moved is None:
            raise HTTPException(status_code=404, detail="Song not found in playlist")

        songs.remove(moved)
        target = min(max(new_position, 0), len(songs))
        songs.insert(target, moved)

        try:
            _renumber(songs)
            db.commit()
            logger.info(f"Song {song_id} moved to position {target} in playlist {playlist_id}")
            return songs
        except Exception as e:
            db.rollback()
            logger.error(f"Error reordering playlist {playlist_id}: {e}")
            raise

# Create singleton instance
playlist_service = PlaylistService()
