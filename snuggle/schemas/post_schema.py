from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .blog_schema import BlogSummary, BlogRef
from .profile_schema import ProfileSummary

# Máximo de categorías que se vinculan a un post
MAX_POST_CATEGORIES = 5


class PostCreate(BaseModel):
    blog_id: str
    title: str
    content: Optional[str] = None
    category_ids: Optional[List[str]] = None
    published: Optional[bool] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('El título no puede estar vacío')
        return v.strip()


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category_ids: Optional[List[str]] = None
    published: Optional[bool] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            if not v.strip():
                raise ValueError('El título no puede estar vacío')
            return v.strip()
        return v


class PostOut(BaseModel):
    id: str
    blog_id: str
    user_id: str
    title: str
    content: str
    published: bool
    thumbnail_url: Optional[str] = None
    category_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PostListItem(BaseModel):
    id: str
    title: str
    content: str
    thumbnail_url: Optional[str] = None
    created_at: datetime
    blog_id: str
    blog: Optional[BlogSummary] = None


class PostSearchItem(PostListItem):
    blog: Optional[BlogRef] = None


class PostBlogInfo(BaseModel):
    id: str
    user_id: str
    name: str
    thumbnail_url: Optional[str] = None

    model_config = {"from_attributes": True}


class PostCategoryInfo(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class PostDetailOut(PostOut):
    blog: PostBlogInfo
    category: Optional[PostCategoryInfo] = None
    category_ids: List[str] = []
    profile: Optional[ProfileSummary] = None
