# ============================================================================
# FILE: musicflow/schemas/user.py
# ============================================================================
from pydantic import EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime
from musicflow.schemas.common import CamelModel, strip_required

class UserCreate(CamelModel):
    """Schema for user registration"""
    name: str
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        # bcrypt only accepts 72 bytes of input
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return value

class UserLogin(CamelModel):
    """Schema for user login"""
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

class UserUpdate(CamelModel):
    """Schema for profile updates; only fields sent are applied"""
    name: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Name is required")

class UserResponse(CamelModel):
    """Schema for user response (never carries the password hash)"""
    id: int
    name: str
    email: str
    avatar: str = ""
    favorite_song_ids: List[int] = []
    playlist_ids: List[int] = []
    created_at: datetime

class OwnerResponse(CamelModel):
    """Minimal public projection of a playlist owner"""
    id: int
    name: str
    email: str

class AuthResponse(CamelModel):
    """Schema for register/login response"""
    user: UserResponse
    token: str
    token_type: str = "bearer"
