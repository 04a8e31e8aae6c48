# ============================================================================
# FILE: musicflow/services/playlist_service.py
# ============================================================================
from typing import List
from sqlalchemy.orm import Session
from musicflow.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from musicflow.db.models.playlist import Playlist
from musicflow.db.models.song import Song
from musicflow.db.models.user import User
from musicflow.schemas.playlist import PlaylistCreate, PlaylistUpdate, PlaylistResponse
from musicflow.schemas.song import SongResponse
from musicflow.schemas.user import OwnerResponse
from musicflow.services.song_service import song_service
import logging

logger = logging.getLogger(__name__)

def owns(playlist: Playlist, user_id: int) -> bool:
    """True when `user_id` is the playlist's owner"""
    return playlist.user_id == user_id

class PlaylistService:
    """Service layer for playlist operations"""

    def _commit(self, db: Session, action: str) -> None:
        try:
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error while trying to {action}: {e}")
            raise

    def _load(self, db: Session, playlist_id: int) -> Playlist:
        playlist = db.get(Playlist, playlist_id)
        if playlist is None:
            raise NotFoundError("Playlist not found")
        return playlist

    def _load_owned(self, db: Session, playlist_id: int, user_id: int, action: str) -> Playlist:
        """Load a playlist the caller is about to mutate (verify ownership)"""
        playlist = self._load(db, playlist_id)
        if not owns(playlist, user_id):
            logger.info(f"User {user_id} denied to {action} playlist {playlist_id}")
            raise ForbiddenError(f"You do not have permission to {action} this playlist")
        return playlist

    def to_response(self, db: Session, playlist: Playlist, with_owner: bool = False) -> PlaylistResponse:
        """Build the API view with song references resolved to full songs"""
        songs = song_service.get_songs_by_ids(db, playlist.song_ids or [])
        owner = None
        if with_owner and playlist.owner is not None:
            owner = OwnerResponse.model_validate(playlist.owner)
        return PlaylistResponse(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description or "",
            user_id=playlist.user_id,
            owner=owner,
            song_ids=list(playlist.song_ids or []),
            songs=[SongResponse.model_validate(song) for song in songs],
            song_count=playlist.song_count,
            cover_image=playlist.cover_image or "",
            is_public=bool(playlist.is_public),
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )

    def get_user_playlists(self, db: Session, user_id: int) -> List[Playlist]:
        """Get all playlists for a user, newest first"""
        return (
            db.query(Playlist)
            .filter(Playlist.user_id == user_id)
            .order_by(Playlist.created_at.desc(), Playlist.id.desc())
            .all()
        )

    def get_playlist(self, db: Session, playlist_id: int, user_id: int) -> Playlist:
        """Get a playlist the caller owns or that is public"""
        playlist = self._load(db, playlist_id)
        if not owns(playlist, user_id) and not playlist.is_public:
            raise ForbiddenError("You do not have permission to view this playlist")
        return playlist

    def create_playlist(self, db: Session, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist and register it on the owner's playlist list"""
        owner = db.get(User, user_id)
        if owner is None:
            raise NotFoundError("User not found")

        playlist = Playlist(
            user_id=user_id,
            name=playlist_data.name,
            description=playlist_data.description or "",
            is_public=bool(playlist_data.is_public),
            cover_image=playlist_data.cover_image or "",
            song_ids=[],
        )
        db.add(playlist)
        try:
            db.flush()
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise
        # Same transaction as the insert
        owner.playlist_ids = [*(owner.playlist_ids or []), playlist.id]
        self._commit(db, "create playlist")
        db.refresh(playlist)
        logger.info(f"Playlist created: {playlist.id} for user {user_id}")
        return playlist

    def update_playlist(self, db: Session, playlist_id: int, user_id: int, update_data: PlaylistUpdate) -> Playlist:
        """Update playlist details, applying only the fields that were sent"""
        playlist = self._load_owned(db, playlist_id, user_id, "edit")
        present = update_data.model_fields_set

        if "name" in present:
            if update_data.name is None:
                raise ValidationError("Playlist name cannot be null")
            playlist.name = update_data.name
        if "description" in present:
            playlist.description = update_data.description or ""
        if "is_public" in present:
            if update_data.is_public is None:
                raise ValidationError("isPublic cannot be null")
            playlist.is_public = update_data.is_public
        if "cover_image" in present:
            playlist.cover_image = update_data.cover_image or ""

        self._commit(db, "update playlist")
        db.refresh(playlist)
        logger.info(f"Playlist updated: {playlist_id}")
        return playlist

    def delete_playlist(self, db: Session, playlist_id: int, user_id: int) -> None:
        """Delete a playlist and drop it from the owner's playlist list"""
        playlist = self._load_owned(db, playlist_id, user_id, "delete")

        owner = db.get(User, playlist.user_id)
        if owner is not None:
            owner.playlist_ids = [pid for pid in (owner.playlist_ids or []) if pid != playlist.id]
        db.delete(playlist)
        self._commit(db, "delete playlist")
        logger.info(f"Playlist deleted: {playlist_id}")

    def add_song_to_playlist(self, db: Session, playlist_id: int, user_id: int, song_id: int) -> Playlist:
        """Append a song to the end of a playlist"""
        playlist = self._load_owned(db, playlist_id, user_id, "add songs to")

        if song_id in (playlist.song_ids or []):
            raise ConflictError("Song is already in the playlist")
        if db.get(Song, song_id) is None:
            raise NotFoundError("Song not found")

        playlist.song_ids = [*(playlist.song_ids or []), song_id]
        self._commit(db, "add song to playlist")
        db.refresh(playlist)
        logger.info(f"Song added to playlist {playlist_id}: {song_id}")
        return playlist

    def remove_song_from_playlist(self, db: Session, playlist_id: int, user_id: int, song_id: int) -> Playlist:
        """Remove every occurrence of a song; absent songs are not an error"""
        playlist = self._load_owned(db, playlist_id, user_id, "remove songs from")

        remaining = [sid for sid in (playlist.song_ids or []) if sid != song_id]
        if len(remaining) != len(playlist.song_ids or []):
            playlist.song_ids = remaining
            self._commit(db, "remove song from playlist")
            db.refresh(playlist)
            logger.info(f"Song removed from playlist {playlist_id}: {song_id}")
        return playlist

    def reorder_playlist(self, db: Session, playlist_id: int, user_id: int, song_ids: List[int]) -> Playlist:
        """Replace the song sequence with `song_ids` as given"""
        if len(set(song_ids)) != len(song_ids):
            raise ValidationError("songIds must not contain duplicates")
        playlist = self._load_owned(db, playlist_id, user_id, "reorder")

        playlist.song_ids = list(song_ids)
        self._commit(db, "reorder playlist")
        db.refresh(playlist)
        logger.info(f"Playlist reordered: {playlist_id}")
        return playlist

# Create singleton instance
playlist_service = PlaylistService()
