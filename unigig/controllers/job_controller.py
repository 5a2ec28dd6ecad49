from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from unigig.db.database import get_db
from unigig.models.job import JobType
from unigig.schemas.job_schema import JobCreate, JobUpdate, JobFilter, JobResponse, JobListing
from unigig.services.auth.auth_service import get_current_user
from unigig.services.job_service import JobService

router = APIRouter()
service = JobService()


@router.get("", response_model=List[JobListing])
async def list_open_jobs(
    search: Optional[str] = None,
    job_type: Optional[JobType] = None,
    db: AsyncSession = Depends(get_db)
):
    return await service.list_open_jobs(db, JobFilter(search=search, job_type=job_type))


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    data: JobCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return await service.create_job(db, current_user, data)


@router.get("/mine", response_model=List[JobResponse])
async def list_my_jobs(db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    return await service.list_employer_jobs(db, current_user)


@router.get("/{job_id}", response_model=JobListing)
async def get_job(job_id: str, db: AsyncSession = Depends(get_db)):
    return await service.get_job(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    data: JobUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return await service.update_job(db, job_id, current_user, data)


@router.delete("/{job_id}", status_code=204)
async def delete_job(job_id: str, db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    await service.delete_job(db, job_id, current_user)
    return Response(status_code=204)
