from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

import unigig.schemas.user_schema as user_schema
from unigig.db.database import get_db
from unigig.services.auth.AuthInterface import IAuthService
from unigig.services.auth.auth_service import auth_service as default_auth_service
from unigig.services.auth.auth_service import get_current_user, oauth2_scheme

router = APIRouter()
auth_service: IAuthService = default_auth_service


@router.post("/register", response_model=user_schema.AuthResponse)
async def register(data: user_schema.UserRegister, db: AsyncSession = Depends(get_db)):
    return await auth_service.sign_up(db, data.email, data.password, data.role, data.display_name)


@router.post("/login", response_model=user_schema.AuthResponse)
async def login(data: user_schema.UserLogin, db: AsyncSession = Depends(get_db)):
    return await auth_service.sign_in(db, data.email, data.password)


@router.get("/me", response_model=user_schema.UnifiedUser)
async def read_current_user(current_user=Depends(get_current_user)):
    """Role-resolved view of the signed-in user"""
    return current_user


@router.post("/logout")
async def logout(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    await auth_service.sign_out(db, token)
    return {"message": "Successfully logged out."}
