from sqlalchemy import Column, String, DateTime
from datetime import datetime

from ..database import Base


class Profile(Base):
    """
    Perfil público del usuario.
    El id es el mismo que asigna Supabase Auth al usuario.
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)
    nickname = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    # Soft delete: si tiene valor, la cuenta está marcada como eliminada
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
