from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from .profile_schema import ProfileSummary


def _validate_blog_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError('El nombre del blog no puede estar vacío')
    if len(v.strip()) > 100:
        raise ValueError('El nombre del blog no puede tener más de 100 caracteres')
    return v.strip()


class BlogCreate(BaseModel):
    name: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_blog_name(v)


class BlogUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return _validate_blog_name(v)
        return v


class BlogOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    user_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class BlogSummary(BaseModel):
    """Datos mínimos del blog que se incrustan en posts y foros."""
    name: str
    thumbnail_url: Optional[str] = None

    model_config = {"from_attributes": True}


class BlogRef(BlogSummary):
    id: str


class NewBlogOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime


class BlogDetailOut(BlogOut):
    profile: Optional[ProfileSummary] = None
    subscriber_count: int = 0
    post_count: int = 0


class BlogWithProfileOut(BlogOut):
    profile: ProfileSummary


class DeletedBlogOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
