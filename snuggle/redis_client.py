"""
Conexión compartida a Redis.

Se crea una sola vez por proceso y se cierra al apagar la aplicación.
"""
import logging

import redis

from .config import get_settings

logger = logging.getLogger(__name__)

_redis_instance: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Retorna el cliente Redis del proceso, creándolo en el primer uso."""
    global _redis_instance
    if _redis_instance is None:
        settings = get_settings()
        _redis_instance = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
            decode_responses=True,
        )
        logger.info(f"Cliente Redis configurado para {settings.redis_host}:{settings.redis_port}")
    return _redis_instance


def close_redis() -> None:
    """Cierra la conexión compartida (si se llegó a crear)."""
    global _redis_instance
    if _redis_instance is not None:
        _redis_instance.close()
        _redis_instance = None
        logger.info("Cliente Redis cerrado")
