import uuid
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from datetime import datetime

from ..database import Base


class Subscription(Base):
    """
    Relación de seguimiento entre usuarios.
    sub_id sigue a subed_id.
    """
    __tablename__ = "subscribe"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    sub_id = Column(String(36), index=True, nullable=False)
    subed_id = Column(String(36), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('sub_id', 'subed_id', name='unique_subscription'),
    )
