# ============================================================================
# FILE: musicflow/api/v1/endpoints/upload.py
# ============================================================================
from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional
from musicflow.api.dependencies import get_media_relay, get_settings
from musicflow.config import Settings
from musicflow.core.exceptions import ValidationError
from musicflow.core.media_relay import MediaRelay, spooled_upload
from musicflow.schemas.common import ApiResponse, ok
from musicflow.schemas.song import UploadResponse

router = APIRouter()

@router.post("/audio", response_model=ApiResponse[UploadResponse])
async def upload_audio(
    audio: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    relay: MediaRelay = Depends(get_media_relay)
):
    """Relay a raw audio file to the media host and return its URL"""
    if audio is None:
        raise ValidationError("No file uploaded. Field name must be 'audio'")

    with spooled_upload(audio, settings) as path:
        asset = await relay.upload_file(path, "audio", "audio")
    return ok(UploadResponse(url=asset.url))
