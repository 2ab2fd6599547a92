
# ============================================================================
# FILE: app/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime
from app.db.base import Base
from app.db.models.user import utcnow

class ListeningHistory(Base):
    """Listening events; feeds the top-artist and top-genre lists"""
    __tablename__ = "listening_history"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, index=True)
    song_title = Column(String, nullable=True)
    artist = Column(String, nullable=False, index=True)
    genre = Column(String, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False)
