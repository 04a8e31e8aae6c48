# ============================================================================
# FILE: musicflow/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from musicflow.db.base import Base

class Playlist(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    # Ordered song ids, resolved against the songs table at read time.
    # Always reassign a new list; in-place mutation is not tracked.
    song_ids = Column(JSON, nullable=False, default=list)
    cover_image = Column(String, nullable=False, default="")
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User")

    @property
    def song_count(self) -> int:
        return len(self.song_ids or [])
