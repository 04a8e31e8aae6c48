# ============================================================================
# FILE: musicflow/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")

class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

class ErrorResponse(BaseModel):
    """Uniform error envelope"""
    success: bool = False
    message: str
    error: Optional[Any] = None

class SongIdRequest(CamelModel):
    """Body carrying a single song reference"""
    song_id: int

class SongIdsRequest(CamelModel):
    """Body carrying a full ordered list of song references"""
    song_ids: List[int]

def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)

def strip_required(value: Optional[str], message: str) -> Optional[str]:
    """Trim a required text field; None passes through for partial updates"""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value
