# ============================================================================
# FILE: musicflow/schemas/topic.py
# ============================================================================
from pydantic import field_validator
from typing import Optional
from datetime import datetime
from musicflow.schemas.common import CamelModel, strip_required

class TopicCreate(CamelModel):
    """Schema for creating a topic"""
    name: str
    description: str = ""
    image_url: str = ""
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Topic name is required")

class TopicUpdate(CamelModel):
    """Schema for updating a topic; only fields sent are applied"""
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return strip_required(value, "Topic name is required")

class TopicResponse(CamelModel):
    """Schema for topic response"""
    id: int
    name: str
    description: str = ""
    image_url: str = ""
    color: str
    created_at: datetime
    updated_at: datetime
