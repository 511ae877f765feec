import re
from typing import Dict, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .models.blog import Blog
from .models.profile import Profile
from .services.auth_service import AuthUser

MAX_PAGE_LIMIT = 100

_IMG_SRC_RE = re.compile(r"""<img[^>]+src=["']([^"']+)["']""")


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_pagination(
    limit: Optional[str],
    offset: Optional[str],
    default_limit: int = 20,
) -> Tuple[int, int]:
    """
    Normaliza los parámetros limit/offset de la query string.

    Ejemplos:
    - (None, None) -> (20, 0)
    - ("0", "-5") -> (20, 0)     un limit de 0 equivale a no enviarlo
    - ("500", "40") -> (100, 40)
    - ("abc", "x") -> (20, 0)
    """
    parsed_limit = _parse_int(limit) or default_limit
    parsed_offset = _parse_int(offset) or 0
    return min(max(1, parsed_limit), MAX_PAGE_LIMIT), max(0, parsed_offset)


def extract_first_image_url(content: Optional[str]) -> Optional[str]:
    """Retorna el src de la primera etiqueta <img> del HTML, o None."""
    if not content:
        return None
    match = _IMG_SRC_RE.search(content)
    return match.group(1) if match else None


def truncate(value: str, max_length: int) -> str:
    return value[:max_length]


LIKE_ESCAPE = "\\"


def like_pattern(text: str) -> str:
    """
    Arma el patrón '%texto%' para ilike escapando los comodines % y _.
    Usar junto con escape=LIKE_ESCAPE.
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def get_owned_blog(db: Session, blog_id: str, user: AuthUser) -> Blog:
    """
    Retorna el blog si pertenece al usuario.
    Responde 403 si no existe o si es de otro usuario.
    """
    blog = db.query(Blog).filter(Blog.id == blog_id).first()
    if not blog or blog.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No autorizado",
        )
    return blog


def load_blogs_by_id(db: Session, blog_ids) -> Dict[str, Blog]:
    """Carga varios blogs en una sola consulta (evita N+1)."""
    ids = set(blog_ids)
    if not ids:
        return {}
    return {b.id: b for b in db.query(Blog).filter(Blog.id.in_(ids)).all()}


def load_profiles_by_id(db: Session, user_ids) -> Dict[str, Profile]:
    """Carga varios perfiles en una sola consulta (evita N+1)."""
    ids = set(user_ids)
    if not ids:
        return {}
    return {p.id: p for p in db.query(Profile).filter(Profile.id.in_(ids)).all()}
