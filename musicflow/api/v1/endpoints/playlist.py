# ============================================================================
# FILE: musicflow/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from musicflow.api.dependencies import get_db, require_current_user
from musicflow.schemas.common import ApiResponse, SongIdRequest, SongIdsRequest, ok
from musicflow.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
)
from musicflow.services.playlist_service import playlist_service
from musicflow.db.models.user import User

router = APIRouter()

@router.get("", response_model=ApiResponse[List[PlaylistResponse]])
async def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists for the current user, newest first
    Requires authentication
    """
    playlists = playlist_service.get_user_playlists(db, current_user.id)
    return ok([playlist_service.to_response(db, p) for p in playlists])

@router.post("", response_model=ApiResponse[PlaylistResponse], status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return ok(playlist_service.to_response(db, playlist), "Playlist created")

@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
async def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get a specific playlist
    Requires authentication; non-owners can only read public playlists
    """
    playlist = playlist_service.get_playlist(db, playlist_id, current_user.id)
    return ok(playlist_service.to_response(db, playlist, with_owner=True))

@router.put("/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
async def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (name, description, cover, public/private)
    Requires authentication and ownership
    """
    playlist = playlist_service.update_playlist(db, playlist_id, current_user.id, update_data)
    return ok(playlist_service.to_response(db, playlist), "Playlist updated")

@router.delete("/{playlist_id}", response_model=ApiResponse[None])
async def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    playlist_service.delete_playlist(db, playlist_id, current_user.id)
    return ok(message="Playlist deleted")

@router.post("/{playlist_id}/songs", response_model=ApiResponse[PlaylistResponse])
async def add_song_to_playlist(
    playlist_id: int,
    song_data: SongIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add a song to the end of a playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.add_song_to_playlist(db, playlist_id, current_user.id, song_data.song_id)
    return ok(playlist_service.to_response(db, playlist), "Song added to playlist")

@router.delete("/{playlist_id}/songs/{song_id}", response_model=ApiResponse[PlaylistResponse])
async def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a song from a playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.remove_song_from_playlist(db, playlist_id, current_user.id, song_id)
    return ok(playlist_service.to_response(db, playlist), "Song removed from playlist")

@router.put("/{playlist_id}/reorder", response_model=ApiResponse[PlaylistResponse])
async def reorder_playlist(
    playlist_id: int,
    order: SongIdsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Replace the playlist's song order with the given songIds
    Requires authentication and ownership
    """
    playlist = playlist_service.reorder_playlist(db, playlist_id, current_user.id, order.song_ids)
    return ok(playlist_service.to_response(db, playlist), "Playlist reordered")
