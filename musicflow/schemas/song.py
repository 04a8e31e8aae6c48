# ============================================================================
# FILE: musicflow/schemas/song.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from musicflow.schemas.common import CamelModel

class MediaAsset(BaseModel):
    """Result of a media relay upload"""
    url: str
    public_id: str
    duration: Optional[float] = None  # Audio only, in seconds

class SongResponse(CamelModel):
    """Schema for song response"""
    id: int
    title: str
    artist: str
    topic_id: int
    audio_url: str
    audio_public_id: str
    duration: Optional[float] = None
    image_url: str
    image_public_id: str
    lyrics: str = ""
    created_at: datetime
    updated_at: datetime

class UploadResponse(CamelModel):
    url: str
