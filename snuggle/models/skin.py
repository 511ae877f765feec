import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime

from ..database import Base

# Nombre de la skin de sistema usada por defecto
DEFAULT_SKIN_NAME = "기본"


class BlogSkin(Base):
    __tablename__ = "blog_skins"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    is_system = Column(Boolean, default=False, index=True)
    css_variables = Column(JSON, nullable=True)
    layout_config = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class BlogSkinApplication(Base):
    """Skin aplicada a un blog (máximo una por blog) y sus personalizaciones."""
    __tablename__ = "blog_skin_applications"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    blog_id = Column(String(36), ForeignKey("blogs.id"), unique=True, index=True, nullable=False)
    skin_id = Column(String(36), ForeignKey("blog_skins.id"), nullable=True)
    custom_css_variables = Column(JSON, nullable=True)
    custom_layout_config = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    skin = relationship("BlogSkin")
