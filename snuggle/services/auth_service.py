"""
Verificación de tokens contra Supabase Auth.
"""
import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from ..config import get_settings

logger = logging.getLogger(__name__)


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: dict = {}


async def get_user(token: str) -> Optional[AuthUser]:
    """
    Obtiene el usuario al que pertenece un bearer token.

    Retorna None si Supabase rechaza el token. Los errores de red se
    propagan como excepciones de httpx.
    """
    settings = get_settings()
    url = f"{settings.supabase_url}/auth/v1/user"
    headers = {
        "apikey": settings.supabase_anon_key,
        "Authorization": f"Bearer {token}",
    }

    async with httpx.AsyncClient(timeout=10.0) as client:
        response = await client.get(url, headers=headers)

    if response.status_code != 200:
        logger.info(f"[Auth] Token rechazado ({response.status_code})")
        return None

    data = response.json()
    return AuthUser(
        id=data["id"],
        email=data.get("email"),
        user_metadata=data.get("user_metadata") or {},
    )
