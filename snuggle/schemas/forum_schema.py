from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .blog_schema import BlogSummary

MAX_FORUM_TITLE_LENGTH = 200
MAX_FORUM_DESCRIPTION_LENGTH = 10000
MAX_COMMENT_LENGTH = 5000


class ForumCreate(BaseModel):
    title: str
    description: str
    blog_id: str

    @field_validator('title', 'description')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v


class CommentCreate(BaseModel):
    forum_id: str
    blog_id: str
    content: str
    parent_id: Optional[str] = None

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('El comentario no puede estar vacío')
        return v


class ForumOut(BaseModel):
    id: str
    title: str
    description: str
    created_at: datetime
    user_id: str
    blog_id: str
    view_count: int

    model_config = {"from_attributes": True}


class ForumWithDetailsOut(ForumOut):
    blog: Optional[BlogSummary] = None
    comment_count: int = 0


class CommentOut(BaseModel):
    id: str
    forum_id: str
    content: str
    created_at: datetime
    user_id: str
    blog_id: str
    parent_id: Optional[str] = None

    model_config = {"from_attributes": True}


class CommentWithBlogOut(CommentOut):
    blog: Optional[BlogSummary] = None


class CommentThreadOut(CommentWithBlogOut):
    replies: List[CommentWithBlogOut] = []
