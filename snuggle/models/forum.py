import uuid
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from datetime import datetime

from ..database import Base


class Forum(Base):
    __tablename__ = "forum"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    user_id = Column(String(36), index=True, nullable=False)
    blog_id = Column(String(36), ForeignKey("blogs.id"), index=True, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ForumComment(Base):
    __tablename__ = "forum_comments"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    forum_id = Column(String(36), ForeignKey("forum.id"), index=True, nullable=False)
    user_id = Column(String(36), index=True, nullable=False)
    blog_id = Column(String(36), ForeignKey("blogs.id"), nullable=False)
    content = Column(Text, nullable=False)
    # Respuesta a otro comentario (un solo nivel)
    parent_id = Column(String(36), ForeignKey("forum_comments.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
