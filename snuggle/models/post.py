import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from ..database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    blog_id = Column(String(36), ForeignKey("blogs.id"), index=True, nullable=False)
    user_id = Column(String(36), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, default="", nullable=False)
    published = Column(Boolean, default=True, index=True)
    # Primera imagen del contenido
    thumbnail_url = Column(String(500), nullable=True)
    # Categoría única (versión anterior, antes de post_categories)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    post_categories = relationship("PostCategory", back_populates="post", cascade="all, delete-orphan")


class PostCategory(Base):
    __tablename__ = "post_categories"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    post_id = Column(String(36), ForeignKey("posts.id"), index=True, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), index=True, nullable=False)

    post = relationship("Post", back_populates="post_categories")
