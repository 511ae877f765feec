"""
Router de visitantes únicos diarios (Redis)
"""
import logging
from typing import Optional

import redis
from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request, status

from ..redis_client import get_redis
from ..services.visitor_service import VisitorService, resolve_visitor_ip

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/visitors", tags=["visitors"])


def get_visitor_service(redis_client: redis.Redis = Depends(get_redis)) -> VisitorService:
    return VisitorService(redis_client)


def _track_visitor(service: VisitorService, ip: str) -> None:
    """Tarea en segundo plano: si Redis falla solo se registra en el log."""
    try:
        service.track(ip)
    except redis.RedisError as e:
        logger.warning(f"No se pudo registrar la visita de {ip}: {e}")


@router.post("")
async def track_visitor(
    request: Request,
    background_tasks: BackgroundTasks,
    x_forwarded_for: Optional[str] = Header(None),
    service: VisitorService = Depends(get_visitor_service),
):
    """
    Registra la visita del cliente actual.
    Se responde de inmediato; el registro en Redis corre después de enviar la respuesta.
    """
    remote_addr = request.client.host if request.client else None
    ip = resolve_visitor_ip(x_forwarded_for, remote_addr)
    background_tasks.add_task(_track_visitor, service, ip)
    return {"success": True}


@router.get("/count")
def get_visitor_count(service: VisitorService = Depends(get_visitor_service)):
    """
    Cantidad de visitantes únicos del día (hora de Corea).
    """
    try:
        return {"count": service.count()}
    except redis.RedisError as e:
        logger.error(f"Error al obtener el contador de visitantes: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener el contador de visitantes",
        )
