from typing import Any, Dict, Union

from fastapi import APIRouter, Body, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from unigig.db.database import get_db
from unigig.schemas.profile_schema import StudentProfileResponse, EmployerProfileResponse
from unigig.services.auth.auth_service import get_current_principal, get_current_user
from unigig.services.profile_service import ProfileService

router = APIRouter()
service = ProfileService()

ProfileOut = Union[StudentProfileResponse, EmployerProfileResponse]


@router.get("/me", response_model=ProfileOut)
async def get_my_profile(db: AsyncSession = Depends(get_db), current_user=Depends(get_current_user)):
    return await service.get_my_profile(db, current_user)


@router.post("/me", response_model=ProfileOut, status_code=201)
async def create_my_profile(
    data: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    principal=Depends(get_current_principal)
):
    """Create the missing profile of a signed-up user; the table follows the stored role."""
    return await service.create_my_profile(db, principal, data)


@router.patch("/me", response_model=ProfileOut)
async def update_my_profile(
    data: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return await service.update_my_profile(db, current_user, data)


@router.post("/me/resume", response_model=StudentProfileResponse)
async def upload_resume(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    content = await file.read()
    return await service.upload_resume(db, current_user, file.filename or "", content)
