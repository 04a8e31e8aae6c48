# ============================================================================
# FILE: musicflow/services/song_service.py
# ============================================================================
from typing import Iterable, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from musicflow.core.exceptions import NotFoundError
from musicflow.db.models.playlist import Playlist
from musicflow.db.models.song import Song, search_key
from musicflow.db.models.topic import Topic
from musicflow.db.models.user import User
from musicflow.schemas.song import MediaAsset
import logging

logger = logging.getLogger(__name__)

def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = search_key(value.strip())
    return value or None

class SongService:
    """Service layer for catalog song operations"""

    def _newest_first(self, query):
        return query.order_by(Song.created_at.desc(), Song.id.desc())

    def list_songs(self, db: Session) -> List[Song]:
        """Get every song in the catalog, newest first"""
        return self._newest_first(db.query(Song)).all()

    def list_songs_by_topic(self, db: Session, topic_id: int) -> List[Song]:
        """Get songs of one topic, newest first"""
        if db.get(Topic, topic_id) is None:
            raise NotFoundError("Topic not found")
        return self._newest_first(db.query(Song).filter(Song.topic_id == topic_id)).all()

    def search_songs(
        self,
        db: Session,
        query: Optional[str] = None,
        artist: Optional[str] = None,
        letter: Optional[str] = None,
    ) -> List[Song]:
        """
        Search songs; every provided filter must match

        Args:
            query: case-insensitive substring of title or artist
            artist: case-insensitive substring of artist
            letter: case-insensitive prefix of title
        """
        q = db.query(Song)
        query, artist, letter = _clean(query), _clean(artist), _clean(letter)

        if query:
            q = q.filter(or_(
                Song.title_search.contains(query, autoescape=True),
                Song.artist_search.contains(query, autoescape=True),
            ))
        if artist:
            q = q.filter(Song.artist_search.contains(artist, autoescape=True))
        if letter:
            q = q.filter(Song.title_search.startswith(letter, autoescape=True))

        return self._newest_first(q).all()

    def get_song(self, db: Session, song_id: int) -> Song:
        song = db.get(Song, song_id)
        if song is None:
            raise NotFoundError("Song not found")
        return song

    def get_songs_by_ids(self, db: Session, song_ids: Iterable[int]) -> List[Song]:
        """Resolve song references in the given order, skipping missing songs"""
        song_ids = list(song_ids)
        if not song_ids:
            return []
        found = {song.id: song for song in db.query(Song).filter(Song.id.in_(set(song_ids))).all()}
        return [found[sid] for sid in song_ids if sid in found]

    def create_song(
        self,
        db: Session,
        title: str,
        artist: str,
        topic_id: int,
        audio: MediaAsset,
        image: MediaAsset,
        lyrics: Optional[str] = None,
    ) -> Song:
        """Persist a song whose assets are already on the media host"""
        try:
            song = Song(
                title=title,
                artist=artist,
                topic_id=topic_id,
                lyrics=lyrics or "",
                audio_url=audio.url,
                audio_public_id=audio.public_id,
                duration=audio.duration,
                image_url=image.url,
                image_public_id=image.public_id,
            )
            db.add(song)
            db.commit()
            db.refresh(song)
            logger.info(f"Song created: {song.id} ({song.artist} - {song.title})")
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating song: {e}")
            raise

    def delete_song(self, db: Session, song_id: int) -> None:
        """Delete a song and drop its references from playlists and favorites"""
        song = self.get_song(db, song_id)
        try:
            for playlist in db.query(Playlist).all():
                if song_id in (playlist.song_ids or []):
                    playlist.song_ids = [sid for sid in playlist.song_ids if sid != song_id]
            for user in db.query(User).all():
                if song_id in (user.favorite_song_ids or []):
                    user.favorite_song_ids = [sid for sid in user.favorite_song_ids if sid != song_id]
            db.delete(song)
            db.commit()
            logger.info(f"Song deleted: {song_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song: {e}")
            raise

# Create singleton instance
song_service = SongService()
