# ============================================================================
# FILE: musicflow/core/media_relay.py
# ============================================================================
import hashlib
import os
import tempfile
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import httpx
from fastapi import UploadFile

from musicflow.config import Settings
from musicflow.core.exceptions import MediaRelayError, ValidationError
from musicflow.schemas.song import MediaAsset
import logging

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

# Cloudinary stores audio under the "video" resource type
RESOURCE_TYPES = {
    "audio": "video",
    "image": "image",
}

@contextmanager
def spooled_upload(upload: UploadFile, settings: Settings) -> Iterator[str]:
    """
    Copy an incoming upload to a local temporary file and yield its path

    The file is removed when the block exits, whether the relay call
    succeeded or raised.

    Raises:
        ValidationError: the upload exceeds MAX_UPLOAD_BYTES
    """
    os.makedirs(settings.UPLOAD_TMP_DIR, exist_ok=True)
    suffix = os.path.splitext(upload.filename or "")[1]
    fd, path = tempfile.mkstemp(prefix="upload-", suffix=suffix, dir=settings.UPLOAD_TMP_DIR)
    try:
        written = 0
        with os.fdopen(fd, "wb") as out:
            upload.file.seek(0)
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > settings.MAX_UPLOAD_BYTES:
                    raise ValidationError(
                        f"File '{upload.filename}' exceeds {settings.MAX_UPLOAD_BYTES} bytes"
                    )
                out.write(chunk)
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)

class MediaRelay:
    """Client for the Cloudinary upload API"""

    API_BASE = "https://api.cloudinary.com/v1_1"

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cloud_name = settings.CLOUDINARY_CLOUD_NAME
        self.api_key = settings.CLOUDINARY_API_KEY
        self.api_secret = settings.CLOUDINARY_API_SECRET
        self.root_folder = settings.MEDIA_ROOT_FOLDER.strip("/")
        self.timeout = settings.MEDIA_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def folder_for(self, category: str) -> str:
        return f"{self.root_folder}/{category}" if self.root_folder else category

    def sign(self, params: Dict[str, str]) -> str:
        """Cloudinary signature: sha1 of the sorted params plus the API secret"""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def _endpoint(self, kind: str, action: str) -> str:
        try:
            resource_type = RESOURCE_TYPES[kind]
        except KeyError:
            raise ValueError(f"Unknown media kind: {kind}")
        return f"{self.API_BASE}/{self.cloud_name}/{resource_type}/{action}"

    async def _post(self, url: str, data: Dict[str, str], files=None) -> Dict:
        if not self.configured:
            raise MediaRelayError("Media relay is not configured")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, data=data, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Media relay request failed: {e}")
            raise MediaRelayError("Upload failed", error=str(e))

        if response.status_code >= 400:
            try:
                detail = response.json().get("error", {}).get("message")
            except ValueError:
                detail = response.text[:200]
            logger.error(f"Media relay returned {response.status_code}: {detail}")
            raise MediaRelayError("Upload failed", error=detail)
        return response.json()

    async def upload_file(self, path: str, category: str, kind: str) -> MediaAsset:
        """
        Upload a local file to `<root>/<category>`

        Args:
            path: local file to send
            category: target folder below MEDIA_ROOT_FOLDER, e.g. "audio"
            kind: "audio" or "image"

        Returns:
            MediaAsset with the durable URL, the public id used for deletion
            and, for audio, the duration in seconds
        """
        url = self._endpoint(kind, "upload")
        params = {"folder": self.folder_for(category), "timestamp": str(int(time.time()))}
        data = {**params, "api_key": self.api_key, "signature": self.sign(params)}

        with open(path, "rb") as fh:
            result = await self._post(url, data, files={"file": (os.path.basename(path), fh)})

        asset = MediaAsset(
            url=result["secure_url"],
            public_id=result["public_id"],
            duration=result.get("duration") if kind == "audio" else None,
        )
        logger.info(f"Uploaded {kind} to media host: {asset.public_id}")
        return asset

    async def destroy(self, public_id: str, kind: str) -> None:
        """Delete a previously uploaded asset by its public id"""
        url = self._endpoint(kind, "destroy")
        params = {"public_id": public_id, "timestamp": str(int(time.time()))}
        data = {**params, "api_key": self.api_key, "signature": self.sign(params)}
        result = await self._post(url, data)
        if result.get("result") not in ("ok", "not found"):
            raise MediaRelayError("Delete failed", error=result.get("result"))
        logger.info(f"Deleted {kind} from media host: {public_id}")
