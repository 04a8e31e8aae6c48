# ============================================================================
# FILE: musicflow/schemas/playlist.py
# ============================================================================
from pydantic import field_validator
from typing import Optional, List
from datetime import datetime
from musicflow.schemas.common import CamelModel, strip_required
from musicflow.schemas.song import SongResponse
from musicflow.schemas.user import OwnerResponse

class PlaylistCreate(CamelModel):
    """Schema for creating a playlist"""
    name: str
    description: Optional[str] = None
    is_public: Optional[bool] = None
    cover_image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Playlist name is required")

class PlaylistUpdate(CamelModel):
    """
    Schema for updating a playlist

    Every field is optional. Only fields present in the request body are
    applied; `model_fields_set` tells an omitted field from an explicit null.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    cover_image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Playlist name is required")

class PlaylistResponse(CamelModel):
    """Schema for playlist response with songs resolved"""
    id: int
    name: str
    description: str = ""
    user_id: int
    owner: Optional[OwnerResponse] = None
    song_ids: List[int] = []
    songs: List[SongResponse] = []
    song_count: int = 0
    cover_image: str = ""
    is_public: bool = False
    created_at: datetime
    updated_at: datetime
