import os

import pytest
from fastapi.testclient import TestClient

from musicflow.config import Settings
from musicflow.main import create_app
from musicflow.schemas.song import MediaAsset
from musicflow.core.exceptions import MediaRelayError
from musicflow.services.song_service import song_service


class FakeMediaRelay:
    """Stands in for Cloudinary; checks the spooled file exists while uploading"""

    configured = True

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.fail_kinds = set()

    async def upload_file(self, path, category, kind):
        assert os.path.exists(path)
        self.uploads.append((path, category, kind))
        if kind in self.fail_kinds:
            raise MediaRelayError("Upload failed", error="simulated")
        n = len(self.uploads)
        return MediaAsset(
            url=f"https://media.test/{category}/{n}",
            public_id=f"musicflow/{category}/{n}",
            duration=215.5 if kind == "audio" else None,
        )

    async def destroy(self, public_id, kind):
        self.destroyed.append((public_id, kind))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        UPLOAD_TMP_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_BYTES=1024,
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="key",
        CLOUDINARY_API_SECRET="secret",
    )


@pytest.fixture
def relay():
    return FakeMediaRelay()


@pytest.fixture
def app(settings, relay):
    app = create_app(settings)
    app.state.media_relay = relay
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    # `client` first so the tables exist
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register(client, name, email, password="secret123"):
    r = client.post("/api/v1/auth/register", json={"name": name, "email": email, "password": password})
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    return {
        "id": data["user"]["id"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def alice(client):
    return register(client, "Alice", "alice@example.com")


@pytest.fixture
def bob(client):
    return register(client, "Bob", "bob@example.com")


@pytest.fixture
def topic(client):
    r = client.post("/api/v1/topics", json={"name": "Pop"})
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def make_song(db, topic):
    """Insert a song directly, as if its assets were already uploaded"""
    counter = {"n": 0}

    def _make(title="Song", artist="Artist", topic_id=None):
        counter["n"] += 1
        n = counter["n"]
        song = song_service.create_song(
            db,
            title=title,
            artist=artist,
            topic_id=topic_id or topic["id"],
            audio=MediaAsset(url=f"https://media.test/a/{n}", public_id=f"a/{n}", duration=200.0),
            image=MediaAsset(url=f"https://media.test/i/{n}", public_id=f"i/{n}"),
        )
        return song.id

    return _make
