"""
Router para gestionar categorías de los blogs
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.category import Category
from ..models.post import Post, PostCategory
from ..schemas.category_schema import CategoryCreate, CategoryOut
from ..services.auth_service import AuthUser
from ..utils import get_owned_blog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/blog/{blog_id}", response_model=List[CategoryOut])
async def list_blog_categories(
    blog_id: str,
    db: Session = Depends(get_db)
):
    """
    Lista las categorías de un blog ordenadas por nombre.
    """
    try:
        return (
            db.query(Category)
            .filter(Category.blog_id == blog_id)
            .order_by(Category.name)
            .all()
        )
    except Exception as e:
        logger.error(f"Error al listar categorías: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener las categorías: {str(e)}"
        )


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Crea una categoría en un blog propio.
    El nombre no puede repetirse dentro del blog (sin distinguir mayúsculas).
    """
    get_owned_blog(db, category_data.blog_id, user)

    existing = db.query(Category).filter(
        Category.blog_id == category_data.blog_id,
        func.lower(Category.name) == category_data.name.lower()
    ).first()

    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Ya existe una categoría con el nombre '{category_data.name}'"
        )

    try:
        category = Category(
            blog_id=category_data.blog_id,
            name=category_data.name
        )

        db.add(category)
        db.commit()
        db.refresh(category)

        logger.info(f"Categoría creada: {category.name} (ID: {category.id})")
        return category

    except Exception as e:
        db.rollback()
        logger.error(f"Error al crear categoría: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear la categoría: {str(e)}"
        )


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Elimina una categoría de un blog propio.
    Los posts que la usaban quedan sin esa categoría.
    """
    category = db.query(Category).filter(Category.id == category_id).first()

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Categoría {category_id} no encontrada"
        )

    get_owned_blog(db, category.blog_id, user)

    try:
        db.query(PostCategory).filter(
            PostCategory.category_id == category_id
        ).delete(synchronize_session=False)
        db.query(Post).filter(
            Post.category_id == category_id
        ).update({Post.category_id: None}, synchronize_session=False)
        db.delete(category)
        db.commit()

        logger.info(f"Categoría eliminada: {category.name} (ID: {category_id})")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al eliminar categoría: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar la categoría: {str(e)}"
        )
