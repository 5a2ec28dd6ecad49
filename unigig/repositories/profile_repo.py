"""
Profile Repository - Data Access Layer
Point lookups and writes on the two disjoint role profile tables.
"""
import logging
from typing import Iterable, List, Optional, Type, Union

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from unigig.models.student_profile import StudentProfile
from unigig.models.employer_profile import EmployerProfile
from unigig.repositories.base import storage_guard

logger = logging.getLogger(__name__)

ProfileModel = Union[StudentProfile, EmployerProfile]


class ProfileRepository:
    @staticmethod
    async def list_student_profiles(db: AsyncSession, user_id: str) -> List[StudentProfile]:
        """All student profile rows owned by user_id (normally zero or one)."""
        return await ProfileRepository._list_by_user(db, StudentProfile, user_id)

    @staticmethod
    async def list_employer_profiles(db: AsyncSession, user_id: str) -> List[EmployerProfile]:
        return await ProfileRepository._list_by_user(db, EmployerProfile, user_id)

    @staticmethod
    async def create_student_profile(db: AsyncSession, user_id: str, data: dict) -> StudentProfile:
        return await ProfileRepository._create(db, StudentProfile, user_id, data)

    @staticmethod
    async def create_employer_profile(db: AsyncSession, user_id: str, data: dict) -> EmployerProfile:
        return await ProfileRepository._create(db, EmployerProfile, user_id, data)

    @staticmethod
    async def update_student_profile(db: AsyncSession, user_id: str, data: dict) -> Optional[StudentProfile]:
        return await ProfileRepository._update(db, StudentProfile, user_id, data)

    @staticmethod
    async def update_employer_profile(db: AsyncSession, user_id: str, data: dict) -> Optional[EmployerProfile]:
        return await ProfileRepository._update(db, EmployerProfile, user_id, data)

    @staticmethod
    async def get_student_profiles_by_user_ids(db: AsyncSession, user_ids: Iterable[str]) -> List[StudentProfile]:
        return await ProfileRepository._list_by_user_ids(db, StudentProfile, user_ids)

    @staticmethod
    async def get_employer_profiles_by_user_ids(db: AsyncSession, user_ids: Iterable[str]) -> List[EmployerProfile]:
        return await ProfileRepository._list_by_user_ids(db, EmployerProfile, user_ids)

    @staticmethod
    async def _list_by_user(db: AsyncSession, model: Type[ProfileModel], user_id: str):
        async with storage_guard(db, f"{model.__tablename__} lookup"):
            result = await db.execute(select(model).where(model.user_id == user_id))
            return list(result.scalars().all())

    @staticmethod
    async def _list_by_user_ids(db: AsyncSession, model: Type[ProfileModel], user_ids: Iterable[str]):
        user_ids = list(set(user_ids))
        if not user_ids:
            return []
        async with storage_guard(db, f"{model.__tablename__} lookup"):
            result = await db.execute(select(model).where(model.user_id.in_(user_ids)))
            return list(result.scalars().all())

    @staticmethod
    async def _create(db: AsyncSession, model: Type[ProfileModel], user_id: str, data: dict):
        profile = model(user_id=user_id, **data)
        async with storage_guard(db, f"{model.__tablename__} insert"):
            db.add(profile)
            await db.commit()
            await db.refresh(profile)
        logger.info(f"Created {model.__tablename__} row for user {user_id}")
        return profile

    @staticmethod
    async def _update(db: AsyncSession, model: Type[ProfileModel], user_id: str, data: dict):
        async with storage_guard(db, f"{model.__tablename__} update"):
            if data:
                result = await db.execute(
                    update(model).where(model.user_id == user_id).values(**data)
                )
                await db.commit()
                if result.rowcount == 0:
                    return None
            result = await db.execute(
                select(model)
                .where(model.user_id == user_id)
                .execution_options(populate_existing=True)
            )
            return result.scalars().first()
