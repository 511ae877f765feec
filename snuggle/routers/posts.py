"""
Router para gestionar posts de los blogs
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import get_current_user, get_optional_user
from ..database import get_db
from ..models.blog import Blog
from ..models.category import Category
from ..models.post import Post, PostCategory
from ..models.profile import Profile
from ..schemas.blog_schema import BlogSummary
from ..schemas.post_schema import (
    MAX_POST_CATEGORIES,
    PostBlogInfo,
    PostCategoryInfo,
    PostCreate,
    PostDetailOut,
    PostListItem,
    PostOut,
    PostUpdate,
)
from ..schemas.profile_schema import ProfileSummary
from ..services.auth_service import AuthUser
from ..utils import extract_first_image_url, get_owned_blog, load_blogs_by_id, parse_pagination

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/posts", tags=["posts"])


def _blog_category_ids(db: Session, blog_id: str, category_ids: List[str]) -> List[str]:
    """
    Filtra las categorías que pertenecen al blog, respetando el orden recibido
    y el máximo de categorías por post.
    """
    if not category_ids:
        return []
    valid = {
        c.id for c in db.query(Category.id).filter(
            Category.blog_id == blog_id,
            Category.id.in_(category_ids),
        ).all()
    }
    result = []
    for category_id in category_ids:
        if category_id in valid and category_id not in result:
            result.append(category_id)
    return result[:MAX_POST_CATEGORIES]


def _get_post_for_owner(db: Session, post_id: str, user: AuthUser) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post {post_id} no encontrado"
        )
    get_owned_blog(db, post.blog_id, user)
    return post


@router.get("", response_model=List[PostListItem])
async def list_posts(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Lista los posts publicados, más recientes primero, con datos del blog.
    """
    page_limit, page_offset = parse_pagination(limit, offset)
    posts = (
        db.query(Post)
        .filter(Post.published.is_(True))
        .order_by(Post.created_at.desc())
        .offset(page_offset)
        .limit(page_limit)
        .all()
    )

    blogs = load_blogs_by_id(db, (p.blog_id for p in posts))
    return [
        PostListItem(
            id=p.id,
            title=p.title,
            content=p.content,
            thumbnail_url=p.thumbnail_url,
            created_at=p.created_at,
            blog_id=p.blog_id,
            blog=BlogSummary.model_validate(blogs[p.blog_id]) if p.blog_id in blogs else None,
        )
        for p in posts
    ]


@router.get("/blog/{blog_id}", response_model=List[PostOut])
async def list_blog_posts(
    blog_id: str,
    showAll: Optional[str] = Query(None),
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """
    Posts de un blog. Los borradores solo se incluyen con showAll=true
    y si quien consulta es el dueño del blog.
    """
    is_owner = False
    if showAll == "true":
        user = await get_optional_user(authorization)
        if user:
            blog = db.query(Blog).filter(Blog.id == blog_id).first()
            is_owner = blog is not None and blog.user_id == user.id

    query = db.query(Post).filter(Post.blog_id == blog_id)
    if not is_owner:
        query = query.filter(Post.published.is_(True))
    return query.order_by(Post.created_at.desc()).all()


@router.get("/{post_id}", response_model=PostDetailOut)
async def get_post(
    post_id: str,
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """
    Detalle de un post con blog, categoría y perfil del autor.
    Un post no publicado responde 404 salvo para el dueño del blog.
    """
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post no encontrado")

    blog = db.query(Blog).filter(Blog.id == post.blog_id).first()
    if not blog:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog no encontrado")

    if not post.published:
        user = await get_optional_user(authorization)
        if not user or user.id != blog.user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post no encontrado")

    category = None
    if post.category_id:
        category = db.query(Category).filter(Category.id == post.category_id).first()

    profile = db.query(Profile).filter(Profile.id == blog.user_id).first()

    return PostDetailOut(
        **PostOut.model_validate(post).model_dump(),
        blog=PostBlogInfo.model_validate(blog),
        category=PostCategoryInfo.model_validate(category) if category else None,
        category_ids=[pc.category_id for pc in post.post_categories],
        profile=ProfileSummary.model_validate(profile) if profile else None,
    )


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Crea un post en un blog del usuario.
    La miniatura es la primera imagen del contenido.
    """
    get_owned_blog(db, post_data.blog_id, user)

    try:
        content = post_data.content or ""
        post = Post(
            blog_id=post_data.blog_id,
            user_id=user.id,
            title=post_data.title,
            content=content,
            published=True if post_data.published is None else post_data.published,
            thumbnail_url=extract_first_image_url(content),
        )
        for category_id in _blog_category_ids(db, post_data.blog_id, post_data.category_ids or []):
            post.post_categories.append(PostCategory(category_id=category_id))

        db.add(post)
        db.commit()
        db.refresh(post)

        logger.info(f"Post creado: {post.title} (ID: {post.id})")
        return post

    except Exception as e:
        db.rollback()
        logger.error(f"Error al crear post: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear el post: {str(e)}"
        )


@router.patch("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Actualiza un post. Si cambia el contenido se recalcula la miniatura;
    si se envía category_ids se reemplazan las categorías.
    """
    post = _get_post_for_owner(db, post_id, user)

    try:
        if post_data.title is not None:
            post.title = post_data.title
        if post_data.content is not None:
            post.content = post_data.content
            post.thumbnail_url = extract_first_image_url(post_data.content)
        if post_data.published is not None:
            post.published = post_data.published

        if post_data.category_ids is not None:
            post.post_categories.clear()
            db.flush()
            for category_id in _blog_category_ids(db, post.blog_id, post_data.category_ids):
                post.post_categories.append(PostCategory(category_id=category_id))

        db.commit()
        db.refresh(post)

        logger.info(f"Post actualizado: {post.title} (ID: {post.id})")
        return post

    except Exception as e:
        db.rollback()
        logger.error(f"Error al actualizar post: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al actualizar el post: {str(e)}"
        )


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Elimina un post (y sus vínculos con categorías).
    """
    post = _get_post_for_owner(db, post_id, user)

    try:
        db.delete(post)
        db.commit()

        logger.info(f"Post eliminado: {post_id}")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al eliminar post: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar el post: {str(e)}"
        )
