# ============================================================================
# FILE: musicflow/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from musicflow.api.dependencies import get_db, require_current_user
from musicflow.db.models.user import User
from musicflow.schemas.common import ApiResponse, SongIdRequest, ok
from musicflow.schemas.song import SongResponse
from musicflow.schemas.user import UserResponse, UserUpdate
from musicflow.services.user_service import user_service

router = APIRouter()

@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return ok(UserResponse.model_validate(current_user))

@router.put("/me", response_model=ApiResponse[UserResponse])
async def update_current_user(
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Update name and/or avatar of the current user"""
    user = user_service.update_profile(db, current_user, update_data)
    return ok(UserResponse.model_validate(user), "Profile updated")

@router.get("/me/favorites", response_model=ApiResponse[List[SongResponse]])
async def get_favorites(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    songs = user_service.list_favorites(db, current_user)
    return ok([SongResponse.model_validate(song) for song in songs])

@router.post("/me/favorites", response_model=ApiResponse[UserResponse])
async def add_favorite(
    body: SongIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Add a song to the current user's favorites"""
    user = user_service.add_favorite(db, current_user, body.song_id)
    return ok(UserResponse.model_validate(user), "Song added to favorites")

@router.delete("/me/favorites/{song_id}", response_model=ApiResponse[UserResponse])
async def remove_favorite(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user = user_service.remove_favorite(db, current_user, song_id)
    return ok(UserResponse.model_validate(user), "Song removed from favorites")
