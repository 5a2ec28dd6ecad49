import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Text, DateTime, Enum as SqlEnum, ForeignKeyConstraint, CheckConstraint,
)
from unigig.db.base import Base
from unigig.models.user import UserRole


class EmployerProfile(Base):
    __tablename__ = "employer_profiles"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id", "role"], ["users.id", "users.role"],
            name="fk_employer_profiles_user_role", ondelete="CASCADE",
        ),
        CheckConstraint("role = 'employer'", name="ck_employer_profiles_role"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), unique=True, nullable=False, index=True)
    role = Column(SqlEnum(UserRole, name="userrole"), nullable=False, default=UserRole.employer)

    company_name = Column(String(200), nullable=False)
    company_description = Column(Text, nullable=True)
    industry = Column(String(200), nullable=True)
    website = Column(String(500), nullable=True)
    contact_person = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
