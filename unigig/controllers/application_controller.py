from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from unigig.db.database import get_db
from unigig.schemas.job_application_schema import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse,
    StudentApplicationView, EmployerApplicationView,
)
from unigig.services.application_service import ApplicationService
from unigig.services.auth.auth_service import get_current_user

router = APIRouter()
service = ApplicationService()


@router.post("", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    data: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return await service.apply(db, data.job_id, current_user, data.cover_letter)


# --- Student: own applications ---
@router.get("/mine", response_model=List[StudentApplicationView])
async def list_my_applications(db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    return await service.list_by_student(db, current_user)


@router.get("/mine/job-ids", response_model=List[str])
async def list_applied_job_ids(db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    return await service.applied_job_ids(db, current_user)


# --- Employer: applications received across own jobs ---
@router.get("/received", response_model=List[EmployerApplicationView])
async def list_received_applications(db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    return await service.list_for_employer_jobs(db, current_user)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return await service.update_status(db, application_id, current_user, data.status)
