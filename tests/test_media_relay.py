import asyncio
import hashlib
import io
import os
from urllib.parse import parse_qs

import httpx
import pytest
from fastapi import UploadFile

from musicflow.core.exceptions import MediaRelayError, ValidationError
from musicflow.core.media_relay import MediaRelay, spooled_upload


def make_upload(content=b"audio-bytes", filename="song.mp3"):
    return UploadFile(file=io.BytesIO(content), filename=filename)


def test_spooled_upload_removes_file(settings):
    with spooled_upload(make_upload(), settings) as path:
        assert path.endswith(".mp3")
        with open(path, "rb") as fh:
            assert fh.read() == b"audio-bytes"
    assert not os.path.exists(path)


def test_spooled_upload_removes_file_on_error(settings):
    with pytest.raises(RuntimeError):
        with spooled_upload(make_upload(), settings) as path:
            raise RuntimeError("relay exploded")
    assert not os.path.exists(path)


def test_spooled_upload_size_limit(settings):
    with pytest.raises(ValidationError):
        with spooled_upload(make_upload(b"x" * (settings.MAX_UPLOAD_BYTES + 1)), settings):
            pass
    assert os.listdir(settings.UPLOAD_TMP_DIR) == []


def test_sign_matches_cloudinary_scheme(settings):
    relay = MediaRelay(settings)
    expected = hashlib.sha1(b"folder=musicflow/audio&timestamp=1700000000secret").hexdigest()
    assert relay.sign({"timestamp": "1700000000", "folder": "musicflow/audio"}) == expected


def test_upload_audio(settings, tmp_path):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={
            "secure_url": "https://res.cloudinary.com/demo/video/upload/v1/musicflow/audio/abc.mp3",
            "public_id": "musicflow/audio/abc",
            "duration": 187.3,
        })

    relay = MediaRelay(settings, transport=httpx.MockTransport(handler))
    path = tmp_path / "song.mp3"
    path.write_bytes(b"audio-bytes")

    asset = asyncio.run(relay.upload_file(str(path), "audio", "audio"))

    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/video/upload"
    assert b"musicflow/audio" in seen["body"]
    assert b"audio-bytes" in seen["body"]
    assert asset.public_id == "musicflow/audio/abc"
    assert asset.duration == 187.3


def test_upload_image_has_no_duration(settings, tmp_path):
    def handler(request):
        assert request.url.path == "/v1_1/demo/image/upload"
        return httpx.Response(200, json={"secure_url": "https://x/cover.jpg", "public_id": "p", "duration": 3})

    relay = MediaRelay(settings, transport=httpx.MockTransport(handler))
    path = tmp_path / "cover.jpg"
    path.write_bytes(b"jpeg")
    asset = asyncio.run(relay.upload_file(str(path), "images", "image"))
    assert asset.duration is None


def test_upload_error_response(settings, tmp_path):
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Invalid Signature"}})

    relay = MediaRelay(settings, transport=httpx.MockTransport(handler))
    path = tmp_path / "song.mp3"
    path.write_bytes(b"audio")
    with pytest.raises(MediaRelayError) as info:
        asyncio.run(relay.upload_file(str(path), "audio", "audio"))
    assert info.value.error == "Invalid Signature"


def test_transport_error(settings, tmp_path):
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    relay = MediaRelay(settings, transport=httpx.MockTransport(handler))
    path = tmp_path / "song.mp3"
    path.write_bytes(b"audio")
    with pytest.raises(MediaRelayError):
        asyncio.run(relay.upload_file(str(path), "audio", "audio"))


def test_destroy(settings):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["form"] = parse_qs(request.read().decode())
        return httpx.Response(200, json={"result": "ok"})

    relay = MediaRelay(settings, transport=httpx.MockTransport(handler))
    asyncio.run(relay.destroy("musicflow/audio/abc", "audio"))
    assert seen["path"] == "/v1_1/demo/video/destroy"
    assert seen["form"]["public_id"] == ["musicflow/audio/abc"]
    assert seen["form"]["api_key"] == ["key"]


def test_unconfigured_relay(settings, tmp_path):
    relay = MediaRelay(settings.model_copy(update={"CLOUDINARY_CLOUD_NAME": ""}))
    assert not relay.configured
    path = tmp_path / "song.mp3"
    path.write_bytes(b"audio")
    with pytest.raises(MediaRelayError):
        asyncio.run(relay.upload_file(str(path), "audio", "audio"))
