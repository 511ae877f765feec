"""
Router de skins (temas visuales) de los blogs
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.skin import DEFAULT_SKIN_NAME, BlogSkin, BlogSkinApplication
from ..schemas.skin_schema import (
    BlogSkinOut,
    SkinApplicationOut,
    SkinApply,
    SkinCustomize,
    SkinOut,
)
from ..services.auth_service import AuthUser
from ..utils import get_owned_blog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/skins", tags=["skins"])


def ensure_default_skin(db: Session) -> None:
    """
    Crea la skin de sistema por defecto si no existe, para que
    /skins/customize tenga una base en instalaciones nuevas.
    """
    exists = db.query(BlogSkin).filter(
        BlogSkin.name == DEFAULT_SKIN_NAME,
        BlogSkin.is_system.is_(True)
    ).first()
    if exists:
        return

    db.add(BlogSkin(
        name=DEFAULT_SKIN_NAME,
        description="Skin por defecto",
        is_system=True,
        css_variables={},
        layout_config={},
    ))
    db.commit()
    logger.info("Skin por defecto creada")


@router.get("", response_model=List[SkinOut])
async def list_system_skins(db: Session = Depends(get_db)):
    """
    Lista las skins de sistema, en orden de creación.
    """
    return (
        db.query(BlogSkin)
        .filter(BlogSkin.is_system.is_(True))
        .order_by(BlogSkin.created_at.asc())
        .all()
    )


@router.get("/blog/{blog_id}", response_model=Optional[BlogSkinOut])
async def get_blog_skin(
    blog_id: str,
    db: Session = Depends(get_db)
):
    """
    Skin aplicada a un blog con sus personalizaciones.
    Responde null si el blog no tiene skin aplicada.
    """
    return db.query(BlogSkinApplication).filter(BlogSkinApplication.blog_id == blog_id).first()


@router.get("/{skin_id}", response_model=SkinOut)
async def get_skin(
    skin_id: str,
    db: Session = Depends(get_db)
):
    skin = db.query(BlogSkin).filter(BlogSkin.id == skin_id).first()
    if not skin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Skin {skin_id} no encontrada"
        )
    return skin


@router.post("/apply", response_model=SkinApplicationOut)
async def apply_skin(
    payload: SkinApply,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Aplica una skin a un blog propio. Reemplaza la skin anterior
    y descarta las personalizaciones.
    """
    get_owned_blog(db, payload.blog_id, user)

    skin = db.query(BlogSkin).filter(BlogSkin.id == payload.skin_id).first()
    if not skin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Skin {payload.skin_id} no encontrada"
        )

    try:
        application = db.query(BlogSkinApplication).filter(
            BlogSkinApplication.blog_id == payload.blog_id
        ).first()
        if not application:
            application = BlogSkinApplication(blog_id=payload.blog_id)
            db.add(application)

        application.skin_id = skin.id
        application.custom_css_variables = None
        application.custom_layout_config = None
        application.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(application)

        logger.info(f"Skin {skin.name} aplicada al blog {payload.blog_id}")
        return application

    except Exception as e:
        db.rollback()
        logger.error(f"Error al aplicar skin: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al aplicar la skin: {str(e)}"
        )


@router.patch("/customize/{blog_id}", response_model=SkinApplicationOut)
async def customize_skin(
    blog_id: str,
    payload: SkinCustomize,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Guarda las personalizaciones de la skin de un blog propio.
    Si el blog no tenía skin aplicada se usa la skin por defecto.
    """
    get_owned_blog(db, blog_id, user)

    try:
        application = db.query(BlogSkinApplication).filter(
            BlogSkinApplication.blog_id == blog_id
        ).first()

        if not application:
            default_skin = db.query(BlogSkin).filter(
                BlogSkin.name == DEFAULT_SKIN_NAME,
                BlogSkin.is_system.is_(True)
            ).first()
            application = BlogSkinApplication(
                blog_id=blog_id,
                skin_id=default_skin.id if default_skin else None,
            )
            db.add(application)

        # Solo se modifican los campos enviados
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(application, field, value)
        application.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(application)

        logger.info(f"Skin personalizada para el blog {blog_id}")
        return application

    except Exception as e:
        db.rollback()
        logger.error(f"Error al personalizar skin: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al personalizar la skin: {str(e)}"
        )


@router.delete("/blog/{blog_id}")
async def reset_blog_skin(
    blog_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Quita la skin aplicada a un blog propio (vuelve al diseño base).
    """
    get_owned_blog(db, blog_id, user)

    try:
        db.query(BlogSkinApplication).filter(
            BlogSkinApplication.blog_id == blog_id
        ).delete(synchronize_session=False)
        db.commit()

        logger.info(f"Skin reiniciada para el blog {blog_id}")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al reiniciar skin: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al reiniciar la skin: {str(e)}"
        )
