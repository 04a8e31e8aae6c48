# ============================================================================
# FILE: musicflow/db/models/topic.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from musicflow.db.base import Base

DEFAULT_TOPIC_COLOR = "#1DB954"

class Topic(Base):
    """Topic (genre) that groups catalog songs"""
    __tablename__ = "topics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    color = Column(String, nullable=False, default=DEFAULT_TOPIC_COLOR)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    songs = relationship("Song", back_populates="topic")
