from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from unigig.models.job import JobType, JobStatus


class JobCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    skills_required: Optional[List[str]] = None
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)
    deadline: Optional[date] = None
    job_type: Optional[JobType] = None
    status: JobStatus = JobStatus.OPEN


class JobUpdate(BaseModel):
    """Partial update; only fields present in the request are written."""
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    requirements: Optional[str] = None
    skills_required: Optional[List[str]] = None
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)
    deadline: Optional[date] = None
    job_type: Optional[JobType] = None
    status: Optional[JobStatus] = None


class JobFilter(BaseModel):
    search: Optional[str] = None
    job_type: Optional[JobType] = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employer_id: str
    title: str
    description: str
    requirements: Optional[str] = None
    skills_required: Optional[List[str]] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    budget_display: str = "Not specified"
    deadline: Optional[date] = None
    job_type: Optional[JobType] = None
    status: JobStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobListing(JobResponse):
    """Open job merged with its employer's public profile fields."""
    company_name: Optional[str] = None
    industry: Optional[str] = None
