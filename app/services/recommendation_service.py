# ============================================================================
# FILE: app/services/recommendation_service.py
# ============================================================================
import threading
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.catalog_client import catalog_client, CatalogClient
from app.db.models.history import ListeningHistory
from app.schemas.catalog import CatalogTrack
from app.schemas.history import HomeDashboard
import logging

logger = logging.getLogger(__name__)

TOP_LIMIT = 5

def _clean_artist(artist: Optional[str]) -> str:
    # Library cards label the artist "by <name>"
    cleaned = (artist or "").strip()
    if cleaned.lower().startswith("by "):
        cleaned = cleaned[3:].strip()
    return cleaned

class RecommendationService:
    """Listening history and the recommendations derived from it"""

    def __init__(self, client: CatalogClient = None):
        self.client = client or catalog_client
        # Serializes the existence check and insert in `add`
        self._record_lock = threading.Lock()

    def get_history(self, db: Session, username: str, limit: Optional[int] = None) -> List[ListeningHistory]:
        """History rows of a user, newest first"""
        query = (
            db.query(ListeningHistory)
            .filter(ListeningHistory.username == username)
            .order_by(ListeningHistory.timestamp.desc(), ListeningHistory.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def _top(self, db: Session, column, username: str, n: int) -> List[str]:
        if n <= 0:
            return []
        count = func.count(ListeningHistory.id)
        rows = (
            db.query(column, count)
            .filter(ListeningHistory.username == username, column.isnot(None))
            .group_by(column)
            .order_by(count.desc(), column.asc())
            .limit(n)
            .all()
        )
        return [value for value, _ in rows]

    def top_artists(self, db: Session, username: str, n: int = TOP_LIMIT) -> List[str]:
        """Most listened artists for a user; equal counts sort by name"""
        return self._top(db, ListeningHistory.artist, username, n)

    def top_genres(self, db: Session, username: str, n: int = TOP_LIMIT) -> List[str]:
        """Most listened genres for a user; rows without a genre are ignored"""
        return self._top(db, ListeningHistory.genre, username, n)

    def add(self, db: Session, artist: str, username: str, title: str, genre: Optional[str] = None) -> Optional[ListeningHistory]:
        """
        Record that `username` listened to `artist`
        Only the first event per (user, artist) is stored; returns None for
        repeats
        """
        artist = _clean_artist(artist)
        if not artist or not (username or "").strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Artist and username are required."
            )

        with self._record_lock:
            existing = db.query(ListeningHistory).filter(
                ListeningHistory.username == username,
                ListeningHistory.artist == artist
            ).first()
            if existing:
                logger.debug(f"Artist already in history for {username}: {artist}")
                return None

            try:
                entry = ListeningHistory(
                    username=username,
                    artist=artist,
                    song_title=title,
                    genre=genre,
                )
                db.add(entry)
                db.commit()
            except Exception as e:
                db.rollback()
                logger.error(f"Error recording listening history: {e}")
                raise

        db.refresh(entry)
        logger.info(f"Listening history recorded for {username}: {artist}")
        return entry

    def resolve_genre(self, artist: str) -> Optional[str]:
        """First genre the catalog lists for an artist, if any"""
        match = self.client.search_artist(_clean_artist(artist))
        if match and match.genres:
            return match.genres[0]
        return None

    def track_play(self, db: Session, username: str, artist: str, title: str, genre: Optional[str] = None) -> Optional[ListeningHistory]:
        """Record a play from the library, looking the genre up when not given"""
        if not genre:
            genre = self.resolve_genre(artist)
        return self.add(db, artist, username, title, genre)

    def recently_played(self, db: Session, username: str, limit: int = 10) -> List[CatalogTrack]:
        """Catalog tracks matching the user's latest history rows"""
        tracks = []
        for entry in self.get_history(db, username, limit):
            track = self.client.get_track_by_title_and_artist(entry.song_title, entry.artist)
            if track is not None:
                tracks.append(track)
        return tracks

    def build_dashboard(self, db: Session, username: str) -> HomeDashboard:
        """Home view sections; any catalog failure leaves its section empty"""
        recent = self.recently_played(db, username)
        return HomeDashboard(
            recently_played=recent,
            recommended_tracks=self._recommended_tracks(db, username, recent),
            new_releases=self.client.get_new_releases(offset=1),
            featured_playlists=self.client.get_featured_playlists(),
            top_artists=self.top_artists(db, username),
            top_genres=self.top_genres(db, username),
        )

    def _recommended_tracks(self, db: Session, username: str, recent: List[CatalogTrack]) -> List[CatalogTrack]:
        # Tracks from the user's top artists, skipping what was just played
        seen = {track.id for track in recent if track.id}
        picks = []
        for artist in self.top_artists(db, username):
            for track in self.client.search(f"artist:{artist}", "track", limit=3).tracks:
                if track.id and track.id in seen:
                    continue
                seen.add(track.id)
                picks.append(track)
        return picks

# Create singleton instance
recommendation_service = RecommendationService()
