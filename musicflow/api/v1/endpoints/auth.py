# ============================================================================
# FILE: musicflow/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from musicflow.api.dependencies import get_db, get_settings
from musicflow.config import Settings
from musicflow.core.exceptions import AuthenticationError
from musicflow.core.security import create_access_token
from musicflow.schemas.common import ApiResponse, ok
from musicflow.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse
from musicflow.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _auth_payload(user, settings: Settings) -> AuthResponse:
    token = create_access_token(data={"sub": str(user.id)}, settings=settings)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)

@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Register a new user account
    Returns the user and a bearer token
    """
    user = user_service.create_user(db, user_data)
    return ok(_auth_payload(user, settings), "Registered successfully")

@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Login with email and password
    Returns the user and a bearer token
    """
    user = user_service.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.info(f"Failed login for {credentials.email}")
        raise AuthenticationError("Incorrect email or password")
    return ok(_auth_payload(user, settings), "Logged in successfully")
