import uuid
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime

from ..database import Base


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), index=True, nullable=False)
    name = Column(String(100), index=True, nullable=False)
    description = Column(Text, nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    # Soft delete (se restaura desde /profile/blog/{id}/restore)
    deleted_at = Column(DateTime, nullable=True)
