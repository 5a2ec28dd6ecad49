from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from unigig.models.log import Log
from unigig.schemas.log import LogSchema
from typing import List
from unigig.db.database import get_db
from unigig.repositories.base import storage_guard
from unigig.services.auth.auth_service import get_current_user

router = APIRouter()


@router.get("", response_model=List[LogSchema])
async def get_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Audit events performed by the signed-in user, newest first"""
    stmt = (
        select(Log)
        .where(Log.actor_id == current_user.id)
        .order_by(Log.timestamp.desc())
        .offset(skip)
        .limit(limit)
    )
    async with storage_guard(db, "audit log list"):
        result = await db.execute(stmt)
        return result.scalars().all()
