import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import NotFound, OwnershipViolation, RoleRequired, ValidationError
from unigig.core.formatting import format_budget
from unigig.core.validators import InputValidator
from unigig.models.employer_profile import EmployerProfile
from unigig.models.job import Job, JobStatus
from unigig.models.user import UserRole
from unigig.repositories.job_repo import JobRepository
from unigig.repositories.profile_repo import ProfileRepository
from unigig.schemas.job_schema import JobCreate, JobUpdate, JobFilter, JobResponse, JobListing
from unigig.schemas.user_schema import UnifiedUser
from unigig.services.logging import record_event

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "description", "status")


def require_role(user: UnifiedUser, role: UserRole) -> None:
    if user.role != role:
        raise RoleRequired(role)


def to_job_response(job: Job, schema=JobResponse, **extra):
    response = schema.model_validate(job)
    response.budget_display = format_budget(job.budget_min, job.budget_max)
    for name, value in extra.items():
        setattr(response, name, value)
    return response


async def employers_by_user_id(db: AsyncSession, user_ids: Iterable[str]) -> Dict[str, EmployerProfile]:
    profiles = await ProfileRepository.get_employer_profiles_by_user_ids(db, user_ids)
    return {p.user_id: p for p in profiles}


class JobService:
    async def create_job(self, db: AsyncSession, user: UnifiedUser, data: JobCreate) -> JobResponse:
        require_role(user, UserRole.employer)
        fields = data.model_dump()
        self._check_fields(fields)
        InputValidator.validate_budget(fields.get("budget_min"), fields.get("budget_max"))

        job = await JobRepository(db).create_job(user.id, fields)
        response = to_job_response(job)
        await record_event(db, action="job_created", status="success", actor_id=user.id,
                           entity_type="job", entity_id=job.id, details=job.title)
        return response

    async def update_job(self, db: AsyncSession, job_id: str, user: UnifiedUser, data: JobUpdate) -> JobResponse:
        require_role(user, UserRole.employer)
        repo = JobRepository(db)
        fields = data.model_dump(exclude_unset=True)
        self._check_fields(fields)

        current = await repo.get_job_by_id(job_id, employer_id=user.id)
        if current is None:
            await self._raise_missing_or_foreign(repo, job_id)
        InputValidator.validate_budget(
            fields.get("budget_min", current.budget_min),
            fields.get("budget_max", current.budget_max),
        )

        job = await repo.update_job(job_id, user.id, fields)
        if job is None:
            # Deleted (or reassigned) between the read and the write
            await self._raise_missing_or_foreign(repo, job_id)
        response = to_job_response(job)
        await record_event(db, action="job_updated", status="success", actor_id=user.id,
                           entity_type="job", entity_id=job_id, details=", ".join(sorted(fields)))
        return response

    async def delete_job(self, db: AsyncSession, job_id: str, user: UnifiedUser) -> None:
        require_role(user, UserRole.employer)
        repo = JobRepository(db)
        if not await repo.delete_job(job_id, user.id):
            await self._raise_missing_or_foreign(repo, job_id)
        await record_event(db, action="job_deleted", status="success", actor_id=user.id,
                           entity_type="job", entity_id=job_id)

    async def get_job(self, db: AsyncSession, job_id: str) -> JobListing:
        job = await JobRepository(db).get_job_by_id(job_id)
        if job is None:
            raise NotFound("Job not found")
        employers = await employers_by_user_id(db, [job.employer_id])
        return self._listing(job, employers.get(job.employer_id))

    async def list_open_jobs(self, db: AsyncSession, filters: Optional[JobFilter] = None) -> List[JobListing]:
        """Open jobs, newest first, merged with employer company details."""
        filters = filters or JobFilter()
        jobs = await JobRepository(db).list_jobs(status=JobStatus.OPEN.value)
        employers = await employers_by_user_id(db, (j.employer_id for j in jobs))
        listings = [self._listing(job, employers.get(job.employer_id)) for job in jobs]

        if filters.job_type:
            listings = [j for j in listings if j.job_type == filters.job_type]
        if filters.search and filters.search.strip():
            term = filters.search.strip().lower()
            listings = [
                j for j in listings
                if term in j.title.lower()
                or term in j.description.lower()
                or term in (j.company_name or "").lower()
            ]
        return listings

    async def list_employer_jobs(self, db: AsyncSession, user: UnifiedUser) -> List[JobResponse]:
        require_role(user, UserRole.employer)
        jobs = await JobRepository(db).list_jobs(employer_id=user.id)
        return [to_job_response(job) for job in jobs]

    @staticmethod
    def _listing(job: Job, employer: Optional[EmployerProfile]) -> JobListing:
        return to_job_response(
            job,
            schema=JobListing,
            company_name=employer.company_name if employer else None,
            industry=employer.industry if employer else None,
        )

    @staticmethod
    def _check_fields(fields: dict) -> None:
        for name in _REQUIRED_FIELDS:
            if name in fields and (fields[name] is None or not str(fields[name]).strip()):
                raise ValidationError(f"{name} is required")
        for name in ("title", "description"):
            if name in fields:
                fields[name] = fields[name].strip()

    @staticmethod
    async def _raise_missing_or_foreign(repo: JobRepository, job_id: str):
        if await repo.get_job_by_id(job_id) is None:
            raise NotFound("Job not found")
        raise OwnershipViolation("You can only modify jobs you posted")
