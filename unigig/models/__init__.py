# Models module
from .user import User, UserRole
from .student_profile import StudentProfile
from .employer_profile import EmployerProfile
from .job import Job, JobType, JobStatus
from .job_application import JobApplication, ApplicationStatus
from .revoked_token import RevokedToken
from .log import Log

__all__ = [
    "User",
    "UserRole",
    "StudentProfile",
    "EmployerProfile",
    "Job",
    "JobType",
    "JobStatus",
    "JobApplication",
    "ApplicationStatus",
    "RevokedToken",
    "Log"
]
