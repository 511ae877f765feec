"""
Router del foro (discusiones entre blogs) y sus comentarios
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.blog import Blog
from ..models.forum import Forum, ForumComment
from ..schemas.blog_schema import BlogSummary
from ..schemas.forum_schema import (
    MAX_COMMENT_LENGTH,
    MAX_FORUM_DESCRIPTION_LENGTH,
    MAX_FORUM_TITLE_LENGTH,
    CommentCreate,
    CommentOut,
    CommentThreadOut,
    CommentWithBlogOut,
    ForumCreate,
    ForumOut,
    ForumWithDetailsOut,
)
from ..services.auth_service import AuthUser
from ..utils import get_owned_blog, load_blogs_by_id, parse_pagination, truncate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/forum", tags=["forum"])


def _blog_summary(blog: Optional[Blog]) -> Optional[BlogSummary]:
    return BlogSummary.model_validate(blog) if blog else None


# --- Comentarios (rutas específicas antes de /{forum_id}) ---

@router.post("/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Comenta un post del foro en nombre de un blog propio.
    parent_id permite responder a otro comentario.
    """
    get_owned_blog(db, comment_data.blog_id, user)

    forum = db.query(Forum).filter(Forum.id == comment_data.forum_id).first()
    if not forum:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post del foro no encontrado"
        )

    try:
        comment = ForumComment(
            forum_id=comment_data.forum_id,
            user_id=user.id,
            blog_id=comment_data.blog_id,
            content=truncate(comment_data.content, MAX_COMMENT_LENGTH),
            parent_id=comment_data.parent_id or None,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)

        logger.info(f"Comentario creado en foro {comment.forum_id} (ID: {comment.id})")
        return comment

    except Exception as e:
        db.rollback()
        logger.error(f"Error al crear comentario: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear el comentario: {str(e)}"
        )


@router.get("/{forum_id}/comments", response_model=List[CommentThreadOut])
async def list_comments(
    forum_id: str,
    db: Session = Depends(get_db)
):
    """
    Comentarios de un post del foro, más antiguos primero.
    Devuelve los comentarios de primer nivel, cada uno con sus respuestas.
    """
    comments = (
        db.query(ForumComment)
        .filter(ForumComment.forum_id == forum_id)
        .order_by(ForumComment.created_at.asc())
        .all()
    )

    blogs = load_blogs_by_id(db, (c.blog_id for c in comments))
    with_blog = [
        CommentWithBlogOut(
            **CommentOut.model_validate(c).model_dump(),
            blog=_blog_summary(blogs.get(c.blog_id)),
        )
        for c in comments
    ]

    replies = [c for c in with_blog if c.parent_id]
    return [
        CommentThreadOut(
            **c.model_dump(),
            replies=[r for r in replies if r.parent_id == c.id],
        )
        for c in with_blog
        if not c.parent_id
    ]


# --- Foro ---

@router.get("", response_model=List[ForumWithDetailsOut])
async def list_forums(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Lista los posts del foro, más recientes primero, con el blog autor
    y la cantidad de comentarios.
    """
    page_limit, page_offset = parse_pagination(limit, offset)
    forums = (
        db.query(Forum)
        .order_by(Forum.created_at.desc())
        .offset(page_offset)
        .limit(page_limit)
        .all()
    )

    blogs = load_blogs_by_id(db, (f.blog_id for f in forums))

    comment_counts = {}
    forum_ids = [f.id for f in forums]
    if forum_ids:
        comment_counts = dict(
            db.query(ForumComment.forum_id, func.count(ForumComment.id))
            .filter(ForumComment.forum_id.in_(forum_ids))
            .group_by(ForumComment.forum_id)
            .all()
        )

    return [
        ForumWithDetailsOut(
            **ForumOut.model_validate(f).model_dump(),
            blog=_blog_summary(blogs.get(f.blog_id)),
            comment_count=comment_counts.get(f.id, 0),
        )
        for f in forums
    ]


@router.post("", response_model=ForumOut, status_code=status.HTTP_201_CREATED)
async def create_forum(
    forum_data: ForumCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Publica en el foro en nombre de un blog propio.
    """
    get_owned_blog(db, forum_data.blog_id, user)

    try:
        forum = Forum(
            title=truncate(forum_data.title.strip(), MAX_FORUM_TITLE_LENGTH),
            description=truncate(forum_data.description, MAX_FORUM_DESCRIPTION_LENGTH),
            user_id=user.id,
            blog_id=forum_data.blog_id,
            view_count=0,
        )
        db.add(forum)
        db.commit()
        db.refresh(forum)

        logger.info(f"Post de foro creado: {forum.title} (ID: {forum.id})")
        return forum

    except Exception as e:
        db.rollback()
        logger.error(f"Error al crear post de foro: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear el post del foro: {str(e)}"
        )


@router.get("/{forum_id}", response_model=ForumWithDetailsOut)
async def get_forum(
    forum_id: str,
    db: Session = Depends(get_db)
):
    """
    Detalle de un post del foro. Suma una vista; si el contador
    falla la respuesta no se ve afectada.
    """
    forum = db.query(Forum).filter(Forum.id == forum_id).first()
    if not forum:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post del foro no encontrado"
        )

    data = ForumOut.model_validate(forum).model_dump()
    data["view_count"] = (forum.view_count or 0) + 1

    try:
        db.query(Forum).filter(Forum.id == forum_id).update(
            {Forum.view_count: Forum.view_count + 1},
            synchronize_session=False,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"No se pudo incrementar view_count del foro {forum_id}: {e}")

    blog = db.query(Blog).filter(Blog.id == data["blog_id"]).first()
    comment_count = db.query(ForumComment).filter(ForumComment.forum_id == forum_id).count()

    return ForumWithDetailsOut(
        **data,
        blog=_blog_summary(blog),
        comment_count=comment_count,
    )
