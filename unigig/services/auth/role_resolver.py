"""
Role resolution for authenticated principals.

A principal is a student or an employer depending on which profile table holds
its row. Student profiles are probed first, so a principal that somehow owns
both kinds resolves as a student.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import InvalidCredentials, ProfileConflict, ProfileNotFound
from unigig.models.user import User, UserRole
from unigig.repositories import user_repo
from unigig.repositories.profile_repo import ProfileRepository
from unigig.schemas.user_schema import UnifiedUser

logger = logging.getLogger(__name__)


class RoleResolver:
    def __init__(self, profiles=ProfileRepository, get_user=user_repo.get_user_by_id):
        self.profiles = profiles
        self.get_user = get_user

    async def resolve(self, db: AsyncSession, principal_id: str) -> UnifiedUser:
        """Build the unified user view for principal_id.

        Raises InvalidCredentials for an unknown principal, ProfileNotFound when
        neither profile exists and ProfileConflict when a table holds more than
        one row for the principal. Storage failures propagate as StorageError.
        """
        principal = await self.get_user(db, principal_id)
        if principal is None:
            raise InvalidCredentials("Unknown user")
        return await self.resolve_user(db, principal)

    async def resolve_user(self, db: AsyncSession, principal: User) -> UnifiedUser:
        students = await self.profiles.list_student_profiles(db, principal.id)
        if len(students) > 1:
            logger.error(f"Principal {principal.id} has {len(students)} student profiles")
            raise ProfileConflict()
        if students:
            return UnifiedUser(
                id=principal.id,
                email=principal.email,
                role=UserRole.student,
                display_name=students[0].full_name,
            )

        employers = await self.profiles.list_employer_profiles(db, principal.id)
        if len(employers) > 1:
            logger.error(f"Principal {principal.id} has {len(employers)} employer profiles")
            raise ProfileConflict()
        if employers:
            return UnifiedUser(
                id=principal.id,
                email=principal.email,
                role=UserRole.employer,
                display_name=employers[0].company_name,
            )

        logger.warning(f"No profile found for principal {principal.id}")
        raise ProfileNotFound()
