"""
Router de suscripciones (seguir / dejar de seguir usuarios)
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.subscription import Subscription
from ..schemas.subscription_schema import FollowRequest, SubscriptionCounts
from ..services.auth_service import AuthUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subscribe", tags=["subscribe"])


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId es requerido"
        )
    return user_id


@router.get("/counts", response_model=SubscriptionCounts)
async def get_subscription_counts(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """
    Cantidad de seguidores (followers) y seguidos (following) de un usuario.
    """
    user_id = _require_user_id(user_id)
    followers = db.query(Subscription).filter(Subscription.subed_id == user_id).count()
    following = db.query(Subscription).filter(Subscription.sub_id == user_id).count()
    return SubscriptionCounts(followers=followers, following=following)


@router.get("/following", response_model=List[str])
async def get_following(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """
    IDs de los usuarios que sigue userId.
    """
    user_id = _require_user_id(user_id)
    rows = (
        db.query(Subscription.subed_id)
        .filter(Subscription.sub_id == user_id)
        .order_by(Subscription.created_at.asc())
        .all()
    )
    return [row.subed_id for row in rows]


@router.post("", status_code=status.HTTP_201_CREATED)
async def follow_user(
    payload: FollowRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Sigue a un usuario. Si ya lo seguía no se crea otro registro.
    """
    if payload.user_id == user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No puedes seguirte a ti mismo"
        )

    existing = db.query(Subscription).filter(
        Subscription.sub_id == user.id,
        Subscription.subed_id == payload.user_id
    ).first()
    if existing:
        return {"success": True}

    try:
        db.add(Subscription(sub_id=user.id, subed_id=payload.user_id))
        db.commit()
        logger.info(f"Usuario {user.id} sigue a {payload.user_id}")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al seguir usuario: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al seguir al usuario: {str(e)}"
        )


@router.delete("/{user_id}")
async def unfollow_user(
    user_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Deja de seguir a un usuario.
    """
    try:
        db.query(Subscription).filter(
            Subscription.sub_id == user.id,
            Subscription.subed_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
        logger.info(f"Usuario {user.id} dejó de seguir a {user_id}")
        return {"success": True}

    except Exception as e:
        db.rollback()
        logger.error(f"Error al dejar de seguir usuario: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al dejar de seguir al usuario: {str(e)}"
        )
