# ============================================================================
# FILE: musicflow/db/models/song.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Float
from sqlalchemy.orm import relationship, validates
from datetime import datetime
import unicodedata
from musicflow.db.base import Base

def search_key(value):
    """Unicode-aware, case-folded form of a text used for catalog search"""
    if value is None:
        return ""
    return unicodedata.normalize("NFC", value).casefold()

class Song(Base):
    """Catalog song with its audio and cover assets on the media host"""
    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    artist = Column(String, nullable=False, index=True)
    # Case-folded copies of title/artist; SQL lower() only folds ASCII on SQLite
    title_search = Column(String, nullable=False, default="", index=True)
    artist_search = Column(String, nullable=False, default="", index=True)
    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=False, index=True)

    # Audio
    audio_url = Column(String, nullable=False)
    audio_public_id = Column(String, nullable=False)
    duration = Column(Float, nullable=True)  # Duration in seconds

    # Cover image
    image_url = Column(String, nullable=False)
    image_public_id = Column(String, nullable=False)

    lyrics = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    topic = relationship("Topic", back_populates="songs")

    @validates("title", "artist")
    def _refresh_search_key(self, key, value):
        setattr(self, f"{key}_search", search_key(value))
        return value
