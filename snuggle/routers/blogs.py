"""
Router de blogs
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.blog import Blog
from ..models.post import Post
from ..models.profile import Profile
from ..models.subscription import Subscription
from ..schemas.blog_schema import BlogCreate, BlogDetailOut, BlogOut, BlogUpdate, NewBlogOut
from ..schemas.profile_schema import ProfileSummary
from ..services.auth_service import AuthUser
from ..utils import get_owned_blog, load_profiles_by_id, parse_pagination

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/blogs", tags=["blogs"])


@router.get("/new", response_model=List[NewBlogOut])
async def list_new_blogs(
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Blogs creados más recientemente (nuevos bloggers), con la foto de perfil del dueño.
    """
    page_limit, _ = parse_pagination(limit, None, default_limit=3)
    blogs = (
        db.query(Blog)
        .filter(Blog.deleted_at.is_(None))
        .order_by(Blog.created_at.desc())
        .limit(page_limit)
        .all()
    )

    profiles = load_profiles_by_id(db, (b.user_id for b in blogs))
    return [
        NewBlogOut(
            id=b.id,
            name=b.name,
            description=b.description,
            thumbnail_url=b.thumbnail_url,
            profile_image_url=profiles[b.user_id].profile_image_url if b.user_id in profiles else None,
            created_at=b.created_at,
        )
        for b in blogs
    ]


@router.get("/{blog_id}", response_model=BlogDetailOut)
async def get_blog(
    blog_id: str,
    db: Session = Depends(get_db)
):
    """
    Detalle del blog con perfil del dueño, cantidad de suscriptores y de posts publicados.
    """
    blog = (
        db.query(Blog)
        .filter(Blog.id == blog_id, Blog.deleted_at.is_(None))
        .first()
    )
    if not blog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blog {blog_id} no encontrado"
        )

    profile = db.query(Profile).filter(Profile.id == blog.user_id).first()
    subscriber_count = db.query(Subscription).filter(Subscription.subed_id == blog.user_id).count()
    post_count = (
        db.query(Post)
        .filter(Post.blog_id == blog_id, Post.published.is_(True))
        .count()
    )

    return BlogDetailOut(
        **BlogOut.model_validate(blog).model_dump(),
        profile=ProfileSummary.model_validate(profile) if profile else None,
        subscriber_count=subscriber_count,
        post_count=post_count,
    )


@router.post("", response_model=BlogOut, status_code=status.HTTP_201_CREATED)
async def create_blog(
    blog_data: BlogCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Crea un blog para el usuario autenticado.
    """
    try:
        blog = Blog(
            user_id=user.id,
            name=blog_data.name,
            description=blog_data.description,
            thumbnail_url=blog_data.thumbnail_url,
        )
        db.add(blog)
        db.commit()
        db.refresh(blog)

        logger.info(f"Blog creado: {blog.name} (ID: {blog.id})")
        return blog

    except Exception as e:
        db.rollback()
        logger.error(f"Error al crear blog: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear el blog: {str(e)}"
        )


@router.patch("/{blog_id}", response_model=BlogOut)
async def update_blog(
    blog_id: str,
    blog_data: BlogUpdate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Actualiza nombre, descripción o miniatura de un blog propio.
    """
    blog = get_owned_blog(db, blog_id, user)

    try:
        if blog_data.name is not None:
            blog.name = blog_data.name
        if blog_data.description is not None:
            blog.description = blog_data.description
        if blog_data.thumbnail_url is not None:
            blog.thumbnail_url = blog_data.thumbnail_url

        db.commit()
        db.refresh(blog)

        logger.info(f"Blog actualizado: {blog.name} (ID: {blog.id})")
        return blog

    except Exception as e:
        db.rollback()
        logger.error(f"Error al actualizar blog: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al actualizar el blog: {str(e)}"
        )
