"""
Contador diario de visitantes únicos sobre sets de Redis.

Cada día calendario (KST, UTC+9) tiene su propio set con key
``snuggle:visitors:<YYYY-MM-DD>``; los miembros son las IPs de los visitantes.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import redis

VISITOR_KEY_PREFIX = "snuggle:visitors:"
VISITOR_TTL_SECONDS = 60 * 60 * 48
KST_OFFSET = timedelta(hours=9)
FALLBACK_VISITOR_IP = "127.0.0.1"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def visitor_key(now: Optional[datetime] = None) -> str:
    """
    Retorna la key del día calendario KST que contiene ``now``.

    Los datetimes sin zona horaria se toman como UTC.
    """
    if now is None:
        now = _utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    kst_date = (now.astimezone(timezone.utc) + KST_OFFSET).date()
    return f"{VISITOR_KEY_PREFIX}{kst_date.isoformat()}"


def resolve_visitor_ip(forwarded_for: Optional[str], remote_addr: Optional[str]) -> str:
    """Primer valor de X-Forwarded-For, luego la IP del socket, luego loopback."""
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return ip
    return remote_addr or FALLBACK_VISITOR_IP


class VisitorService:
    def __init__(self, redis_client: redis.Redis, clock: Callable[[], datetime] = _utcnow):
        self.redis = redis_client
        self.clock = clock

    def track(self, ip: str) -> None:
        """
        Agrega ``ip`` al set del día y renueva el TTL de la key a 48 horas.

        SADD y EXPIRE se envían como dos comandos; una falla entre ambos puede
        dejar el miembro guardado sin renovar el TTL.
        """
        key = visitor_key(self.clock())
        self.redis.sadd(key, ip)
        self.redis.expire(key, VISITOR_TTL_SECONDS)

    def count(self) -> int:
        """Visitantes distintos registrados hoy (0 si la key no existe)."""
        return int(self.redis.scard(visitor_key(self.clock())))
