# ============================================================================
# FILE: musicflow/api/v1/endpoints/topic.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from musicflow.api.dependencies import get_db
from musicflow.schemas.common import ApiResponse, ok
from musicflow.schemas.song import SongResponse
from musicflow.schemas.topic import TopicCreate, TopicResponse, TopicUpdate
from musicflow.services.song_service import song_service
from musicflow.services.topic_service import topic_service

router = APIRouter()

@router.get("", response_model=ApiResponse[List[TopicResponse]])
async def list_topics(db: Session = Depends(get_db)):
    """Get all topics sorted by name"""
    topics = topic_service.list_topics(db)
    return ok([TopicResponse.model_validate(t) for t in topics])

@router.get("/{topic_id}/songs", response_model=ApiResponse[List[SongResponse]])
async def get_topic_songs(topic_id: int, db: Session = Depends(get_db)):
    """Get songs of a topic, newest first"""
    songs = song_service.list_songs_by_topic(db, topic_id)
    return ok([SongResponse.model_validate(s) for s in songs])

@router.post("", response_model=ApiResponse[TopicResponse], status_code=status.HTTP_201_CREATED)
async def create_topic(topic_data: TopicCreate, db: Session = Depends(get_db)):
    topic = topic_service.create_topic(db, topic_data)
    return ok(TopicResponse.model_validate(topic), "Topic created successfully")

@router.put("/{topic_id}", response_model=ApiResponse[TopicResponse])
async def update_topic(topic_id: int, update_data: TopicUpdate, db: Session = Depends(get_db)):
    """Update the topic fields present in the request"""
    topic = topic_service.update_topic(db, topic_id, update_data)
    return ok(TopicResponse.model_validate(topic), "Topic updated successfully")

@router.delete("/{topic_id}", response_model=ApiResponse[None])
async def delete_topic(topic_id: int, db: Session = Depends(get_db)):
    """Delete a topic; refused while songs still reference it"""
    topic_service.delete_topic(db, topic_id)
    return ok(message="Topic deleted successfully")
