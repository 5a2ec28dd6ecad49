from sqlalchemy import Column, Integer, String, DateTime
from unigig.db.base import Base
from datetime import datetime

class RevokedToken(Base):
    """jti of an access token invalidated by sign-out."""
    __tablename__ = "revoked_tokens"
    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String(64), unique=True, index=True, nullable=False)
    user_id = Column(String(36), nullable=True)
    revoked_at = Column(DateTime, default=datetime.utcnow)
