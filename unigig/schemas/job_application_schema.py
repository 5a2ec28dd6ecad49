from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from unigig.models.job import JobType
from unigig.models.job_application import ApplicationStatus


class ApplicationCreate(BaseModel):
    job_id: str
    cover_letter: Optional[str] = Field(None, max_length=5000)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    student_id: str
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    applied_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentApplicationView(ApplicationResponse):
    """A student's application with the job and employer it targets."""
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    job_type: Optional[JobType] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    budget_display: str = "Not specified"
    company_name: Optional[str] = None


class EmployerApplicationView(ApplicationResponse):
    """An application received by an employer with the applicant's profile."""
    job_title: Optional[str] = None
    student_name: str
    student_university: Optional[str] = None
    student_major: Optional[str] = None
    student_year_of_study: Optional[int] = None
    student_skills: Optional[List[str]] = None
    student_resume_url: Optional[str] = None
