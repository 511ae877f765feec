import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from datetime import datetime

from ..database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    blog_id = Column(String(36), ForeignKey("blogs.id"), index=True, nullable=False)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
