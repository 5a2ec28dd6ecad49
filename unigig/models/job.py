import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, Text, Float, Date, DateTime, JSON, ForeignKey
from unigig.db.base import Base


class JobType(str, Enum):
    PART_TIME = "part-time"
    FULL_TIME = "full-time"
    PROJECT = "project"
    INTERNSHIP = "internship"


class JobStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    FILLED = "filled"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    skills_required = Column(JSON, nullable=True)

    # min <= max is checked on input, not by the table
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)
    # Informational only; nothing closes a job when it passes
    deadline = Column(Date, nullable=True)

    job_type = Column(String(20), nullable=True)
    status = Column(String(20), default=JobStatus.OPEN.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
