# ============================================================================
# FILE: musicflow/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from musicflow.api.v1.endpoints import auth, playlist, song, topic, upload, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(user.router, prefix="/users", tags=["users"])
api_router.include_router(song.router, prefix="/songs", tags=["songs"])
api_router.include_router(topic.router, prefix="/topics", tags=["topics"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
