from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime, timezone
from unigig.db.base import Base


class Log(Base):
    """Audit trail of major marketplace events."""
    __tablename__ = 'logs'
    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(
        timezone.utc), nullable=False)
    action = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False)
    details = Column(Text, nullable=True)
    actor_id = Column(String(36), nullable=True, index=True)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(String(36), nullable=True)
