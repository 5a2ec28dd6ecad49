import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import (
    AlreadyApplied, InvalidStatusTransition, NotFound, OwnershipViolation,
    StorageConflict, ValidationError,
)
from unigig.core.formatting import format_budget
from unigig.models.job import JobStatus, JobType
from unigig.models.job_application import ApplicationStatus
from unigig.models.user import UserRole
from unigig.repositories.job_application_repo import JobApplicationRepository
from unigig.repositories.job_repo import JobRepository
from unigig.repositories.profile_repo import ProfileRepository
from unigig.schemas.job_application_schema import (
    ApplicationResponse, StudentApplicationView, EmployerApplicationView,
)
from unigig.schemas.user_schema import UnifiedUser
from unigig.services.job_service import require_role, employers_by_user_id
from unigig.services.logging import record_event

logger = logging.getLogger(__name__)

# pending is the only non-terminal state
ALLOWED_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


class ApplicationService:
    async def apply(self, db: AsyncSession, job_id: str, user: UnifiedUser,
                    cover_letter: Optional[str] = None) -> ApplicationResponse:
        require_role(user, UserRole.student)

        job = await JobRepository(db).get_job_by_id(job_id)
        if job is None:
            raise NotFound("Job not found")
        if job.status != JobStatus.OPEN.value:
            raise ValidationError("This job is not accepting applications")

        # Check for duplicate
        if await JobApplicationRepository.get_by_job_and_student(db, job_id, user.id):
            raise AlreadyApplied()

        cover_letter = (cover_letter or "").strip() or None
        try:
            application = await JobApplicationRepository.create_application(db, {
                "job_id": job_id,
                "student_id": user.id,
                "status": ApplicationStatus.PENDING.value,
                "cover_letter": cover_letter,
            })
        except StorageConflict:
            # Unique (job_id, student_id) caught a concurrent duplicate
            raise AlreadyApplied()

        response = ApplicationResponse.model_validate(application)
        await record_event(db, action="application_submitted", status="success", actor_id=user.id,
                           entity_type="job_application", entity_id=application.id,
                           details=f"Applied to job {job_id}")
        return response

    async def applied_job_ids(self, db: AsyncSession, user: UnifiedUser) -> List[str]:
        require_role(user, UserRole.student)
        return await JobApplicationRepository.list_job_ids_for_student(db, user.id)

    async def list_by_student(self, db: AsyncSession, user: UnifiedUser) -> List[StudentApplicationView]:
        """The student's applications, newest first, with job and company details merged in."""
        require_role(user, UserRole.student)
        applications = await JobApplicationRepository.list_by_student(db, user.id)
        jobs = {j.id: j for j in await JobRepository(db).get_jobs_by_ids(a.job_id for a in applications)}
        employers = await employers_by_user_id(db, (j.employer_id for j in jobs.values()))

        views = []
        for app in applications:
            job = jobs.get(app.job_id)
            employer = employers.get(job.employer_id) if job else None
            view = StudentApplicationView.model_validate(app)
            if job:
                view.job_title = job.title
                view.job_description = job.description
                view.job_type = JobType(job.job_type) if job.job_type else None
                view.budget_min = job.budget_min
                view.budget_max = job.budget_max
                view.budget_display = format_budget(job.budget_min, job.budget_max)
            view.company_name = employer.company_name if employer else None
            views.append(view)
        return views

    async def list_for_employer_jobs(self, db: AsyncSession, user: UnifiedUser) -> List[EmployerApplicationView]:
        """Applications across all of the employer's jobs, newest first, with applicant profiles."""
        require_role(user, UserRole.employer)
        jobs = {j.id: j for j in await JobRepository(db).list_jobs(employer_id=user.id)}
        if not jobs:
            return []
        applications = await JobApplicationRepository.list_by_job_ids(db, jobs.keys())
        profiles = {
            p.user_id: p
            for p in await ProfileRepository.get_student_profiles_by_user_ids(
                db, (a.student_id for a in applications))
        }

        views = []
        for app in applications:
            profile = profiles.get(app.student_id)
            data = ApplicationResponse.model_validate(app).model_dump()
            data.update(
                job_title=jobs[app.job_id].title,
                # Applicants without a profile are shown by id
                student_name=profile.full_name if profile else app.student_id,
            )
            if profile:
                data.update(
                    student_university=profile.university,
                    student_major=profile.major,
                    student_year_of_study=profile.year_of_study,
                    student_skills=profile.skills,
                    student_resume_url=profile.resume_url,
                )
            views.append(EmployerApplicationView(**data))
        return views

    async def update_status(self, db: AsyncSession, application_id: str, user: UnifiedUser,
                            new_status) -> ApplicationResponse:
        require_role(user, UserRole.employer)
        try:
            new_status = ApplicationStatus(getattr(new_status, "value", new_status))
        except ValueError:
            raise ValidationError(f"Unknown application status: {new_status}")

        application = await JobApplicationRepository.get_by_id(db, application_id)
        if application is None:
            raise NotFound("Application not found")
        owned_job = await JobRepository(db).get_job_by_id(application.job_id, employer_id=user.id)
        if owned_job is None:
            raise OwnershipViolation("You can only review applications to your own jobs")

        current = ApplicationStatus(application.status)
        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStatusTransition(current, new_status)
        if not await JobApplicationRepository.update_status_if_pending(db, application_id, new_status):
            # Another reviewer decided first
            latest = await JobApplicationRepository.get_by_id(db, application_id)
            raise InvalidStatusTransition(latest.status if latest else current, new_status)

        await record_event(db, action="application_status_changed", status="success", actor_id=user.id,
                           entity_type="job_application", entity_id=application_id,
                           details=f"{current.value} -> {new_status.value}")
        updated = await JobApplicationRepository.get_by_id(db, application_id)
        return ApplicationResponse.model_validate(updated)
