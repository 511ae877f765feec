"""
Servicio de Cloudflare R2 (compatible con S3) para subir y eliminar imágenes.
"""
import boto3

from ..config import get_settings

_s3_client = None


def _get_s3_client():
    """Crea el cliente S3 de forma lazy para asegurar que las variables de entorno estén cargadas."""
    global _s3_client
    if _s3_client is not None:
        return _s3_client

    settings = get_settings()
    _s3_client = boto3.client(
        service_name="s3",
        region_name="auto",
        endpoint_url=f"https://{settings.r2_account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.r2_access_key_id,
        aws_secret_access_key=settings.r2_secret_access_key,
    )
    return _s3_client


def upload_file(content: bytes, key: str, content_type: str) -> str:
    """
    Sube un archivo al bucket.

    Args:
        content: Contenido del archivo
        key: Key del objeto dentro del bucket (ej: "blog/<usuario>/<ts>.png")
        content_type: Tipo MIME que se guarda con el objeto

    Returns:
        URL pública del objeto subido
    """
    settings = get_settings()
    _get_s3_client().put_object(
        Bucket=settings.r2_bucket_name,
        Key=key,
        Body=content,
        ContentType=content_type,
    )
    return f"{settings.r2_public_url}/{key}"


def delete_file(key: str) -> None:
    """Elimina un objeto del bucket a partir de su key."""
    _get_s3_client().delete_object(
        Bucket=get_settings().r2_bucket_name,
        Key=key,
    )


def get_key_from_url(url: str) -> str | None:
    """
    Extrae la key del objeto a partir de su URL pública.

    Ejemplo:
    - "https://cdn.example.com/temp/u1/abc.png" -> "temp/u1/abc.png"

    Retorna None si la URL no pertenece al bucket público.
    """
    public_url = get_settings().r2_public_url
    if not public_url or not url.startswith(f"{public_url}/"):
        return None
    return url[len(public_url) + 1:]
