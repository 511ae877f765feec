"""
Router para subir y eliminar imágenes en R2
"""
import logging
import time
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from ..auth import get_current_user
from ..services import storage_service
from ..services.auth_service import AuthUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/upload", tags=["upload"])

# Imágenes de posts publicados (sin GIF)
PERMANENT_TYPES = {"image/jpeg", "image/png", "image/webp"}
PERMANENT_MAX_SIZE = 5 * 1024 * 1024

# Imágenes temporales del editor (borradores)
TEMP_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
TEMP_MAX_SIZE = 10 * 1024 * 1024


class TempDeleteRequest(BaseModel):
    url: Optional[str] = None


def _extension(filename: Optional[str]) -> str:
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
        if ext:
            return ext
    return "png"


async def _read_image(file: Optional[UploadFile], allowed_types: set, max_size: int) -> bytes:
    """Valida tipo y tamaño del archivo y retorna su contenido."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No se envió ningún archivo")

    if file.content_type not in allowed_types:
        allowed = ", ".join(sorted(t.split("/")[1].upper() for t in allowed_types))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Solo se permiten archivos {allowed}"
        )

    # Se lee como máximo un byte más que el límite
    contents = await file.read(max_size + 1)
    if len(contents) > max_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"El archivo supera el máximo de {max_size // (1024 * 1024)}MB"
        )
    return contents


@router.post("")
async def upload_image(
    file: Optional[UploadFile] = File(None),
    user: AuthUser = Depends(get_current_user)
):
    """
    Sube una imagen definitiva (posts publicados).
    """
    contents = await _read_image(file, PERMANENT_TYPES, PERMANENT_MAX_SIZE)
    key = f"blog/{user.id}/{int(time.time() * 1000)}.{_extension(file.filename)}"

    try:
        url = storage_service.upload_file(contents, key, file.content_type)
    except Exception as e:
        logger.error(f"Error al subir imagen: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al subir la imagen"
        )

    logger.info(f"Imagen subida: {key}")
    return {"url": url}


@router.post("/temp")
async def upload_temp_image(
    file: Optional[UploadFile] = File(None),
    user: AuthUser = Depends(get_current_user)
):
    """
    Sube una imagen temporal del editor con nombre único.
    """
    contents = await _read_image(file, TEMP_TYPES, TEMP_MAX_SIZE)
    key = f"temp/{user.id}/{uuid.uuid4()}.{_extension(file.filename)}"

    try:
        url = storage_service.upload_file(contents, key, file.content_type)
    except Exception as e:
        logger.error(f"Error al subir imagen temporal: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al subir la imagen"
        )

    logger.info(f"Imagen temporal subida: {key}")
    return {"url": url}


@router.delete("/temp")
async def delete_temp_image(
    payload: TempDeleteRequest,
    user: AuthUser = Depends(get_current_user)
):
    """
    Elimina una imagen temporal. Solo se pueden borrar archivos
    dentro de temp/<usuario>/.
    """
    if not payload.url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No se envió la URL")

    key = storage_service.get_key_from_url(payload.url)
    if not key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL inválida")

    if not key.startswith(f"temp/{user.id}/"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No autorizado")

    try:
        storage_service.delete_file(key)
    except Exception as e:
        logger.error(f"Error al eliminar imagen temporal: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al eliminar la imagen"
        )

    logger.info(f"Imagen temporal eliminada: {key}")
    return {"success": True}
