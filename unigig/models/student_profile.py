import uuid
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, JSON, Enum as SqlEnum,
    ForeignKeyConstraint, CheckConstraint,
)
from unigig.db.base import Base
from unigig.models.user import UserRole


class StudentProfile(Base):
    __tablename__ = "student_profiles"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id", "role"], ["users.id", "users.role"],
            name="fk_student_profiles_user_role", ondelete="CASCADE",
        ),
        CheckConstraint("role = 'student'", name="ck_student_profiles_role"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), unique=True, nullable=False, index=True)
    role = Column(SqlEnum(UserRole, name="userrole"), nullable=False, default=UserRole.student)

    full_name = Column(String(200), nullable=False)
    bio = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    university = Column(String(200), nullable=True)
    major = Column(String(200), nullable=True)
    year_of_study = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=True)
    resume_url = Column(String(1000), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
