# ============================================================================
# FILE: musicflow/api/v1/endpoints/song.py
# ============================================================================
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from musicflow.api.dependencies import get_db, get_media_relay, get_settings, require_current_user
from musicflow.config import Settings
from musicflow.core.exceptions import MediaRelayError, ValidationError
from musicflow.core.media_relay import MediaRelay, spooled_upload
from musicflow.db.models.user import User
from musicflow.schemas.common import ApiResponse, ok
from musicflow.schemas.song import SongResponse
from musicflow.services.song_service import song_service
from musicflow.services.topic_service import topic_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _songs(songs) -> List[SongResponse]:
    return [SongResponse.model_validate(song) for song in songs]

@router.get("", response_model=ApiResponse[List[SongResponse]])
async def list_songs(db: Session = Depends(get_db)):
    """Get all songs, newest first"""
    return ok(_songs(song_service.list_songs(db)))

@router.get("/search", response_model=ApiResponse[List[SongResponse]])
async def search_songs(
    query: Optional[str] = Query(None, description="Substring of title or artist"),
    artist: Optional[str] = Query(None, description="Substring of artist"),
    letter: Optional[str] = Query(None, description="First letter(s) of title"),
    db: Session = Depends(get_db)
):
    """
    Search songs; all filters are optional and combined with AND
    Matching is case-insensitive
    """
    return ok(_songs(song_service.search_songs(db, query=query, artist=artist, letter=letter)))

@router.get("/{song_id}", response_model=ApiResponse[SongResponse])
async def get_song(song_id: int, db: Session = Depends(get_db)):
    return ok(SongResponse.model_validate(song_service.get_song(db, song_id)))

@router.post("", response_model=ApiResponse[SongResponse], status_code=status.HTTP_201_CREATED)
async def upload_song(
    title: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    topic_id: Optional[int] = Form(None, alias="topicId"),
    lyrics: Optional[str] = Form(None),
    audio: Optional[UploadFile] = File(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    relay: MediaRelay = Depends(get_media_relay)
):
    """
    Upload a song (multipart: title, artist, topicId, lyrics?, audio, image)
    Both files are relayed to the media host before the song is saved
    """
    title = (title or "").strip()
    artist = (artist or "").strip()
    if not title or not artist or topic_id is None:
        raise ValidationError("Missing required fields", error="title, artist and topicId are required")
    if audio is None or image is None:
        raise ValidationError("Audio or image file missing")

    topic_service.get_topic(db, topic_id)

    with spooled_upload(audio, settings) as audio_path, spooled_upload(image, settings) as image_path:
        audio_asset = await relay.upload_file(audio_path, "audio", "audio")
        try:
            image_asset = await relay.upload_file(image_path, "images", "image")
        except MediaRelayError:
            logger.warning(f"Image upload failed, removing audio {audio_asset.public_id}")
            await relay.destroy(audio_asset.public_id, "audio")
            raise

    try:
        song = song_service.create_song(
            db,
            title=title,
            artist=artist,
            topic_id=topic_id,
            lyrics=lyrics,
            audio=audio_asset,
            image=image_asset,
        )
    except Exception:
        logger.warning(f"Saving song failed, removing assets {audio_asset.public_id}, {image_asset.public_id}")
        await relay.destroy(audio_asset.public_id, "audio")
        await relay.destroy(image_asset.public_id, "image")
        raise
    return ok(SongResponse.model_validate(song), "Upload song successfully")

@router.delete("/{song_id}", response_model=ApiResponse[None])
async def delete_song(
    song_id: int,
    current_user: User = Depends(require_current_user),
    db: Session = Depends(get_db),
    relay: MediaRelay = Depends(get_media_relay)
):
    """Delete a song and its assets on the media host (requires authentication)"""
    song = song_service.get_song(db, song_id)
    await relay.destroy(song.audio_public_id, "audio")
    await relay.destroy(song.image_public_id, "image")
    song_service.delete_song(db, song_id)
    return ok(message="Song deleted")
