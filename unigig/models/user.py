import enum
import uuid

from sqlalchemy import Column, String, Enum as SqlEnum, DateTime, UniqueConstraint, func
from unigig.db.base import Base


class UserRole(enum.Enum):
    student = "student"
    employer = "employer"


class User(Base):
    """Principal: the credential record. ``role`` is fixed at sign-up."""
    __tablename__ = "users"
    # Target of the (user_id, role) foreign keys on both profile tables
    __table_args__ = (UniqueConstraint("id", "role", name="uq_users_id_role"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(SqlEnum(UserRole, name="userrole"), nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
