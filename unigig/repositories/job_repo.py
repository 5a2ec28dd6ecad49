"""
Job Repository - Data Access Layer
Ownership is enforced in the WHERE clause of every mutating statement.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, update, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from unigig.models.job import Job
from unigig.repositories.base import storage_guard

logger = logging.getLogger(__name__)


class JobRepository:
    """Repository for Job entity following Repository Pattern"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_job(self, employer_id: str, data: dict) -> Job:
        job = Job(employer_id=employer_id, **data)
        async with storage_guard(self.db, "job insert"):
            self.db.add(job)
            await self.db.commit()
            await self.db.refresh(job)
        logger.info(f"Created job {job.id} for employer {employer_id}")
        return job

    async def get_job_by_id(self, job_id: str, employer_id: Optional[str] = None) -> Optional[Job]:
        """Get job by ID with optional ownership check"""
        query = select(Job).where(Job.id == job_id)
        if employer_id:
            query = query.where(Job.employer_id == employer_id)
        async with storage_guard(self.db, "job lookup"):
            result = await self.db.execute(query.execution_options(populate_existing=True))
            return result.scalars().first()

    async def update_job(self, job_id: str, employer_id: str, data: dict) -> Optional[Job]:
        """Apply data to the job only if employer_id owns it; None when nothing matched."""
        async with storage_guard(self.db, "job update"):
            result = await self.db.execute(
                update(Job)
                .where(Job.id == job_id, Job.employer_id == employer_id)
                .values(**data)
            )
            await self.db.commit()
        if result.rowcount == 0:
            return None
        logger.info(f"Updated job {job_id}: {sorted(data)}")
        return await self.get_job_by_id(job_id, employer_id)

    async def delete_job(self, job_id: str, employer_id: str) -> bool:
        async with storage_guard(self.db, "job delete"):
            result = await self.db.execute(
                delete(Job).where(Job.id == job_id, Job.employer_id == employer_id)
            )
            await self.db.commit()
        return result.rowcount > 0

    async def list_jobs(self, status: Optional[str] = None, employer_id: Optional[str] = None) -> List[Job]:
        """Jobs newest first, optionally narrowed by status and owner."""
        query = select(Job)
        if status:
            query = query.where(Job.status == status)
        if employer_id:
            query = query.where(Job.employer_id == employer_id)
        async with storage_guard(self.db, "job list"):
            result = await self.db.execute(query.order_by(desc(Job.created_at)))
            return list(result.scalars().all())

    async def get_jobs_by_ids(self, job_ids: Iterable[str]) -> List[Job]:
        job_ids = list(set(job_ids))
        if not job_ids:
            return []
        async with storage_guard(self.db, "job lookup"):
            result = await self.db.execute(select(Job).where(Job.id.in_(job_ids)))
            return list(result.scalars().all())
