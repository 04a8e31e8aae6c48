# ============================================================================
# FILE: musicflow/services/topic_service.py
# ============================================================================
from typing import List
from sqlalchemy.orm import Session
from musicflow.core.exceptions import ConflictError, NotFoundError, ValidationError
from musicflow.db.models.song import Song
from musicflow.db.models.topic import Topic, DEFAULT_TOPIC_COLOR
from musicflow.schemas.topic import TopicCreate, TopicUpdate
import logging

logger = logging.getLogger(__name__)

class TopicService:
    """Service layer for topic operations"""

    def list_topics(self, db: Session) -> List[Topic]:
        """Get all topics sorted by name"""
        return db.query(Topic).order_by(Topic.name.asc()).all()

    def get_topic(self, db: Session, topic_id: int) -> Topic:
        topic = db.get(Topic, topic_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic

    def _ensure_unique_name(self, db: Session, name: str, exclude_id: int = None) -> None:
        query = db.query(Topic).filter(Topic.name == name)
        if exclude_id is not None:
            query = query.filter(Topic.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Topic '{name}' already exists")

    def create_topic(self, db: Session, topic_data: TopicCreate) -> Topic:
        self._ensure_unique_name(db, topic_data.name)
        try:
            topic = Topic(
                name=topic_data.name,
                description=topic_data.description or "",
                image_url=topic_data.image_url or "",
                color=topic_data.color or DEFAULT_TOPIC_COLOR,
            )
            db.add(topic)
            db.commit()
            db.refresh(topic)
            logger.info(f"Topic created: {topic.name}")
            return topic
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating topic: {e}")
            raise

    def update_topic(self, db: Session, topic_id: int, update_data: TopicUpdate) -> Topic:
        """Update a topic, applying only the fields that were sent"""
        topic = self.get_topic(db, topic_id)
        present = update_data.model_fields_set

        if "name" in present:
            if update_data.name is None:
                raise ValidationError("Topic name cannot be null")
            self._ensure_unique_name(db, update_data.name, exclude_id=topic_id)
            topic.name = update_data.name
        if "description" in present:
            topic.description = update_data.description or ""
        if "image_url" in present:
            topic.image_url = update_data.image_url or ""
        if "color" in present:
            topic.color = update_data.color or DEFAULT_TOPIC_COLOR

        try:
            db.commit()
            db.refresh(topic)
            logger.info(f"Topic updated: {topic_id}")
            return topic
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating topic: {e}")
            raise

    def delete_topic(self, db: Session, topic_id: int) -> None:
        """Delete a topic that no song references"""
        topic = self.get_topic(db, topic_id)
        in_use = db.query(Song).filter(Song.topic_id == topic_id).count()
        if in_use:
            raise ConflictError(f"Topic is still used by {in_use} song(s)")

        try:
            db.delete(topic)
            db.commit()
            logger.info(f"Topic deleted: {topic_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting topic: {e}")
            raise

# Create singleton instance
topic_service = TopicService()
