"""
Dependencias de autenticación (Bearer token de Supabase).
"""
import logging
from typing import Optional

import httpx
from fastapi import Header, HTTPException, status

from .services import auth_service
from .services.auth_service import AuthUser

logger = logging.getLogger(__name__)


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ")[1]


async def get_current_user(authorization: Optional[str] = Header(None)) -> AuthUser:
    """
    Requiere un usuario autenticado. Responde 401 si falta el token,
    si es inválido o si no se pudo verificar.
    """
    token = _extract_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No se envió token")

    try:
        user = await auth_service.get_user(token)
    except httpx.HTTPError as e:
        logger.warning(f"Error verificando token: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No se pudo verificar el token")

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")
    return user


async def get_optional_user(authorization: Optional[str] = Header(None)) -> Optional[AuthUser]:
    """Igual que get_current_user pero retorna None en vez de fallar."""
    token = _extract_token(authorization)
    if not token:
        return None
    try:
        return await auth_service.get_user(token)
    except httpx.HTTPError as e:
        logger.warning(f"Error verificando token opcional: {e}")
        return None
