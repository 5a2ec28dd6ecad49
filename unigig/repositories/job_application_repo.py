from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, desc
from typing import Optional, List, Iterable
from datetime import datetime

from unigig.models.job_application import JobApplication, ApplicationStatus
from unigig.repositories.base import storage_guard


class JobApplicationRepository:
    @staticmethod
    async def create_application(db: AsyncSession, data: dict) -> JobApplication:
        application = JobApplication(**data)
        async with storage_guard(db, "application insert"):
            db.add(application)
            await db.commit()
            await db.refresh(application)
        return application

    @staticmethod
    async def get_by_job_and_student(db: AsyncSession, job_id: str, student_id: str) -> Optional[JobApplication]:
        async with storage_guard(db, "application lookup"):
            result = await db.execute(
                select(JobApplication).where(
                    JobApplication.job_id == job_id,
                    JobApplication.student_id == student_id
                )
            )
            return result.scalars().first()

    @staticmethod
    async def get_by_id(db: AsyncSession, application_id: str) -> Optional[JobApplication]:
        async with storage_guard(db, "application lookup"):
            result = await db.execute(
                select(JobApplication)
                .where(JobApplication.id == application_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    @staticmethod
    async def list_by_student(db: AsyncSession, student_id: str) -> List[JobApplication]:
        async with storage_guard(db, "application list"):
            result = await db.execute(
                select(JobApplication)
                .where(JobApplication.student_id == student_id)
                .order_by(desc(JobApplication.applied_at))
            )
            return list(result.scalars().all())

    @staticmethod
    async def list_by_job_ids(db: AsyncSession, job_ids: Iterable[str]) -> List[JobApplication]:
        """Applications for any of job_ids, newest first."""
        job_ids = list(set(job_ids))
        if not job_ids:
            return []
        async with storage_guard(db, "application list"):
            result = await db.execute(
                select(JobApplication)
                .where(JobApplication.job_id.in_(job_ids))
                .order_by(desc(JobApplication.applied_at))
            )
            return list(result.scalars().all())

    @staticmethod
    async def list_job_ids_for_student(db: AsyncSession, student_id: str) -> List[str]:
        async with storage_guard(db, "application list"):
            result = await db.execute(
                select(JobApplication.job_id).where(JobApplication.student_id == student_id)
            )
            return [row[0] for row in result.all()]

    @staticmethod
    async def update_status_if_pending(db: AsyncSession, application_id: str, new_status: ApplicationStatus) -> bool:
        """Move a pending application to new_status; False if it is no longer pending."""
        async with storage_guard(db, "application status update"):
            result = await db.execute(
                update(JobApplication)
                .where(
                    JobApplication.id == application_id,
                    JobApplication.status == ApplicationStatus.PENDING.value
                )
                .values(status=new_status.value, updated_at=datetime.utcnow())
            )
            await db.commit()
        return result.rowcount > 0
