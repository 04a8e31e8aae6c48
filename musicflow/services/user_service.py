# ============================================================================
# FILE: musicflow/services/user_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from musicflow.core.exceptions import ConflictError, NotFoundError, ValidationError
from musicflow.core.security import get_password_hash, verify_password
from musicflow.db.models.song import Song
from musicflow.db.models.user import User
from musicflow.schemas.user import UserCreate, UserUpdate
from musicflow.services.song_service import song_service
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        if self.get_user_by_email(db, user_data.email):
            raise ConflictError("Email already registered")
        try:
            hashed_password = get_password_hash(user_data.password)
            user = User(
                name=user_data.name,
                email=user_data.email,
                hashed_password=hashed_password,
                avatar="",
                favorite_song_ids=[],
                playlist_ids=[],
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.id} <{user.email}>")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def authenticate_user(self, db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = self.get_user_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def update_profile(self, db: Session, user: User, update_data: UserUpdate) -> User:
        """Apply the profile fields present in the request"""
        present = update_data.model_fields_set
        if "name" in present:
            if update_data.name is None:
                raise ValidationError("Name cannot be null")
            user.name = update_data.name
        if "avatar" in present:
            user.avatar = update_data.avatar or ""
        try:
            db.commit()
            db.refresh(user)
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating user {user.id}: {e}")
            raise

    def list_favorites(self, db: Session, user: User) -> List[Song]:
        return song_service.get_songs_by_ids(db, user.favorite_song_ids or [])

    def add_favorite(self, db: Session, user: User, song_id: int) -> User:
        """Mark a song as favorite; already-favorite songs are left as is"""
        if db.get(Song, song_id) is None:
            raise NotFoundError("Song not found")
        if song_id in (user.favorite_song_ids or []):
            return user
        user.favorite_song_ids = [*(user.favorite_song_ids or []), song_id]
        try:
            db.commit()
            db.refresh(user)
            logger.info(f"Favorite added for user {user.id}: {song_id}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding favorite: {e}")
            raise

    def remove_favorite(self, db: Session, user: User, song_id: int) -> User:
        if song_id not in (user.favorite_song_ids or []):
            return user
        user.favorite_song_ids = [sid for sid in user.favorite_song_ids if sid != song_id]
        try:
            db.commit()
            db.refresh(user)
            logger.info(f"Favorite removed for user {user.id}: {song_id}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing favorite: {e}")
            raise

# Create singleton instance
user_service = UserService()
