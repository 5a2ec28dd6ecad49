from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from unigig.models.job import JobStatus
from unigig.models.job_application import ApplicationStatus
from unigig.models.user import UserRole
from unigig.repositories.job_application_repo import JobApplicationRepository
from unigig.repositories.job_repo import JobRepository
from unigig.schemas.user_schema import UnifiedUser


async def get_dashboard_summary(db: AsyncSession, user: UnifiedUser):
    if user.role == UserRole.student:
        return await _student_summary(db, user)
    return await _employer_summary(db, user)


async def _student_summary(db: AsyncSession, user: UnifiedUser):
    applications = await JobApplicationRepository.list_by_student(db, user.id)
    counts = _count_statuses(applications)
    return {
        "role": user.role.value,
        "display_name": user.display_name,
        "applications_sent": len(applications),
        "pending_applications": counts[ApplicationStatus.PENDING.value],
        "accepted_applications": counts[ApplicationStatus.ACCEPTED.value],
        "rejected_applications": counts[ApplicationStatus.REJECTED.value],
    }


async def _employer_summary(db: AsyncSession, user: UnifiedUser):
    jobs = await JobRepository(db).list_jobs(employer_id=user.id)
    applications = await JobApplicationRepository.list_by_job_ids(db, [j.id for j in jobs])
    counts = _count_statuses(applications)

    # Recent jobs (last 5 by created_at)
    recent_jobs = sorted(jobs, key=lambda j: j.created_at or datetime.min, reverse=True)[:5]
    return {
        "role": user.role.value,
        "display_name": user.display_name,
        "open_jobs": sum(1 for j in jobs if j.status == JobStatus.OPEN.value),
        "closed_jobs": sum(1 for j in jobs if j.status == JobStatus.CLOSED.value),
        "filled_jobs": sum(1 for j in jobs if j.status == JobStatus.FILLED.value),
        "total_jobs": len(jobs),
        "applications_received": len(applications),
        "pending_review": counts[ApplicationStatus.PENDING.value],
        "hired_students": counts[ApplicationStatus.ACCEPTED.value],
        "recent_jobs": [
            {
                "job_id": j.id,
                "title": j.title,
                "status": j.status,
                "application_count": sum(1 for a in applications if a.job_id == j.id),
                "date": j.created_at.date().isoformat() if j.created_at else None,
            }
            for j in recent_jobs
        ],
    }


def _count_statuses(applications):
    counts = {status.value: 0 for status in ApplicationStatus}
    for app in applications:
        counts[app.status] = counts.get(app.status, 0) + 1
    return counts
