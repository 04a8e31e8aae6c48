# ============================================================================
# FILE: musicflow/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Iterator, Optional
from musicflow.config import Settings
from musicflow.core.exceptions import AuthenticationError
from musicflow.core.media_relay import MediaRelay
from musicflow.core.security import decode_access_token
from musicflow.db.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

def get_settings(request: Request) -> Settings:
    """Settings the running app was built with"""
    return request.app.state.settings

def get_db(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to one request"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def get_media_relay(request: Request) -> MediaRelay:
    return request.app.state.media_relay

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """
    Get current authenticated user from JWT token
    Returns None if no token, invalid/expired token or unknown user
    """
    if not token:
        return None

    try:
        payload = decode_access_token(token, settings)
        subject = payload.get("sub")
        if subject is None:
            return None
        user_id = int(subject)
    except (AuthenticationError, ValueError):
        return None

    return db.get(User, user_id)

def require_current_user(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.user_id = current_user.id
    return current_user
