"""
Router de búsqueda de posts, blogs y sugerencias
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.blog import Blog
from ..models.category import Category
from ..models.post import Post
from ..schemas.blog_schema import BlogOut, BlogRef, BlogWithProfileOut
from ..schemas.post_schema import PostSearchItem
from ..schemas.profile_schema import ProfileSummary
from ..utils import LIKE_ESCAPE, like_pattern, load_blogs_by_id, load_profiles_by_id, parse_pagination

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["search"])

MIN_SUGGEST_LENGTH = 2


# --- Schemas para sugerencias ---

class PostSuggestion(BaseModel):
    id: str
    title: str
    blog_id: str

    model_config = {"from_attributes": True}


class BlogSuggestion(BaseModel):
    id: str
    name: str
    thumbnail_url: Optional[str] = None

    model_config = {"from_attributes": True}


class CategorySuggestion(BaseModel):
    id: str
    name: str
    blog_id: str

    model_config = {"from_attributes": True}


class SuggestResponse(BaseModel):
    posts: List[PostSuggestion] = []
    blogs: List[BlogSuggestion] = []
    categories: List[CategorySuggestion] = []


@router.get("/posts", response_model=List[PostSearchItem])
async def search_posts(
    q: str = Query(""),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Busca en título y contenido de los posts publicados (sin distinguir mayúsculas).
    """
    query = q.strip()
    if not query:
        return []

    page_limit, page_offset = parse_pagination(limit, offset)
    pattern = like_pattern(query)
    try:
        posts = (
            db.query(Post)
            .filter(
                Post.published.is_(True),
                or_(
                    Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Post.created_at.desc())
            .offset(page_offset)
            .limit(page_limit)
            .all()
        )
        blogs = load_blogs_by_id(db, (p.blog_id for p in posts))
    except Exception as e:
        logger.error(f"Error al buscar posts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al buscar posts: {str(e)}"
        )

    return [
        PostSearchItem(
            id=p.id,
            title=p.title,
            content=p.content,
            thumbnail_url=p.thumbnail_url,
            created_at=p.created_at,
            blog_id=p.blog_id,
            blog=BlogRef.model_validate(blogs[p.blog_id]) if p.blog_id in blogs else None,
        )
        for p in posts
    ]


@router.get("/blogs", response_model=List[BlogWithProfileOut])
async def search_blogs(
    q: str = Query(""),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Busca blogs activos por nombre o descripción.
    Si el dueño no tiene perfil se devuelve uno vacío con su id.
    """
    query = q.strip()
    if not query:
        return []

    page_limit, page_offset = parse_pagination(limit, offset)
    pattern = like_pattern(query)
    try:
        blogs = (
            db.query(Blog)
            .filter(
                Blog.deleted_at.is_(None),
                or_(
                    Blog.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Blog.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Blog.created_at.desc())
            .offset(page_offset)
            .limit(page_limit)
            .all()
        )
        profiles = load_profiles_by_id(db, (b.user_id for b in blogs))
    except Exception as e:
        logger.error(f"Error al buscar blogs: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al buscar blogs: {str(e)}"
        )

    results = []
    for b in blogs:
        profile = profiles.get(b.user_id)
        results.append(BlogWithProfileOut(
            **BlogOut.model_validate(b).model_dump(),
            profile=ProfileSummary.model_validate(profile) if profile else ProfileSummary(id=b.user_id),
        ))
    return results


@router.get("/suggest", response_model=SuggestResponse)
async def suggest(
    q: str = Query(""),
    db: Session = Depends(get_db)
):
    """
    Sugerencias de autocompletado: hasta 5 posts, 3 blogs y 3 categorías.
    Requiere al menos 2 caracteres.
    """
    query = q.strip()
    if len(query) < MIN_SUGGEST_LENGTH:
        return SuggestResponse()

    pattern = like_pattern(query)
    try:
        posts = (
            db.query(Post)
            .filter(Post.published.is_(True), Post.title.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(Post.created_at.desc())
            .limit(5)
            .all()
        )
        blogs = (
            db.query(Blog)
            .filter(Blog.deleted_at.is_(None), Blog.name.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(Blog.created_at.desc())
            .limit(3)
            .all()
        )
        categories = (
            db.query(Category)
            .filter(Category.name.ilike(pattern, escape=LIKE_ESCAPE))
            .limit(3)
            .all()
        )
    except Exception as e:
        logger.error(f"Error al obtener sugerencias: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener sugerencias: {str(e)}"
        )

    return SuggestResponse(
        posts=[PostSuggestion.model_validate(p) for p in posts],
        blogs=[BlogSuggestion.model_validate(b) for b in blogs],
        categories=[CategorySuggestion.model_validate(c) for c in categories],
    )
