"""
Router de perfil y cuenta del usuario autenticado
"""
import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.blog import Blog
from ..models.profile import Profile
from ..schemas.blog_schema import DeletedBlogOut
from ..schemas.profile_schema import AccountStatusOut, ProfileOut
from ..services.auth_service import AuthUser
from ..utils import get_owned_blog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("/sync", response_model=ProfileOut)
async def sync_profile(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Sincroniza la tabla profiles con los metadatos del proveedor de login
    (foto y nombre). Crea el perfil si no existe.
    """
    metadata = user.user_metadata or {}
    profile_image_url = metadata.get("avatar_url") or metadata.get("picture")
    nickname = metadata.get("name") or metadata.get("full_name")

    try:
        profile = db.query(Profile).filter(Profile.id == user.id).first()
        if not profile:
            profile = Profile(id=user.id)
            db.add(profile)

        profile.profile_image_url = profile_image_url
        profile.nickname = nickname

        db.commit()
        db.refresh(profile)

        logger.info(f"Perfil sincronizado: {user.id}")
        return profile

    except Exception as e:
        db.rollback()
        logger.error(f"Error al sincronizar perfil: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al sincronizar el perfil: {str(e)}"
        )


@router.get("/status", response_model=AccountStatusOut)
async def get_account_status(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Indica si la cuenta está marcada como eliminada.
    """
    profile = db.query(Profile).filter(Profile.id == user.id).first()
    deleted_at = profile.deleted_at if profile else None
    return AccountStatusOut(isDeleted=deleted_at is not None, deletedAt=deleted_at)


@router.delete("")
async def delete_account(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Elimina la cuenta (soft delete) junto con todos los blogs activos del usuario.
    """
    now = datetime.utcnow()
    try:
        db.query(Profile).filter(Profile.id == user.id).update(
            {Profile.deleted_at: now}, synchronize_session=False
        )
        blogs_deleted = db.query(Blog).filter(
            Blog.user_id == user.id,
            Blog.deleted_at.is_(None)
        ).update({Blog.deleted_at: now}, synchronize_session=False)
        db.commit()

        logger.info(f"Cuenta eliminada: {user.id} ({blogs_deleted} blog(s))")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al eliminar cuenta: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar la cuenta: {str(e)}"
        )


@router.post("/restore")
async def restore_account(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Restaura la cuenta. Los blogs se restauran uno por uno
    desde /profile/blog/{blog_id}/restore.
    """
    try:
        db.query(Profile).filter(Profile.id == user.id).update(
            {Profile.deleted_at: None}, synchronize_session=False
        )
        db.commit()

        logger.info(f"Cuenta restaurada: {user.id}")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al restaurar cuenta: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al restaurar la cuenta: {str(e)}"
        )


@router.get("/blogs/deleted", response_model=List[DeletedBlogOut])
async def list_deleted_blogs(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Blogs eliminados del usuario, los más recientes primero.
    """
    return (
        db.query(Blog)
        .filter(Blog.user_id == user.id, Blog.deleted_at.isnot(None))
        .order_by(Blog.deleted_at.desc())
        .all()
    )


@router.delete("/blog/{blog_id}")
async def delete_blog(
    blog_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Elimina un blog propio (soft delete).
    """
    blog = get_owned_blog(db, blog_id, user)

    try:
        blog.deleted_at = datetime.utcnow()
        db.commit()

        logger.info(f"Blog eliminado: {blog.name} (ID: {blog_id})")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al eliminar blog: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar el blog: {str(e)}"
        )


@router.post("/blog/{blog_id}/restore")
async def restore_blog(
    blog_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Restaura un blog propio eliminado.
    """
    blog = get_owned_blog(db, blog_id, user)

    try:
        blog.deleted_at = None
        db.commit()

        logger.info(f"Blog restaurado: {blog.name} (ID: {blog_id})")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al restaurar blog: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al restaurar el blog: {str(e)}"
        )
