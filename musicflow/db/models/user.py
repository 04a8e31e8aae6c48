# ============================================================================
# FILE: musicflow/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime
from musicflow.db.base import Base

class User(Base):
    """User model for authentication, favorites and playlist ownership"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    avatar = Column(String, nullable=False, default="")
    # Song ids, set semantics
    favorite_song_ids = Column(JSON, nullable=False, default=list)
    # Owned playlist ids, in creation order
    playlist_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
