import logging
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import (
    ProfileConflict, ProfileNotFound, RoleRequired, StorageConflict, ValidationError,
)
from unigig.core.validators import InputValidator
from unigig.models.user import User, UserRole
from unigig.repositories.profile_repo import ProfileRepository
from unigig.schemas.profile_schema import (
    StudentProfileCreate, StudentProfileUpdate, StudentProfileResponse,
    EmployerProfileCreate, EmployerProfileUpdate, EmployerProfileResponse,
)
from unigig.schemas.user_schema import UnifiedUser
from unigig.services.logging import record_event
from unigig.services.storage_service import ResumeStorage, MAX_RESUME_BYTES, resume_key, stale_resume_keys

logger = logging.getLogger(__name__)

ProfileResponse = Union[StudentProfileResponse, EmployerProfileResponse]

# Name fields must stay meaningful after sanitizing
_NAME_FIELDS = {"full_name", "company_name"}


def parse_payload(schema, data: Dict[str, Any]) -> BaseModel:
    """Validate a raw dict against schema, raising the domain ValidationError."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise ValidationError(f"{field}: {first.get('msg')}")


class ProfileService:
    def __init__(self, storage: Optional[ResumeStorage] = None, profiles=ProfileRepository):
        self.storage = storage or ResumeStorage()
        self.profiles = profiles

    async def get_my_profile(self, db: AsyncSession, user: UnifiedUser) -> ProfileResponse:
        if user.role == UserRole.student:
            rows = await self.profiles.list_student_profiles(db, user.id)
            return StudentProfileResponse.model_validate(self._single(rows))
        rows = await self.profiles.list_employer_profiles(db, user.id)
        return EmployerProfileResponse.model_validate(self._single(rows))

    async def create_my_profile(self, db: AsyncSession, principal: User, data: Dict[str, Any]) -> ProfileResponse:
        """
        Lazily create the profile of a principal that has none.

        The table is picked from the role stored on the principal at sign-up.
        """
        if (await self.profiles.list_student_profiles(db, principal.id)
                or await self.profiles.list_employer_profiles(db, principal.id)):
            raise ProfileConflict("Profile already exists")

        try:
            if principal.role == UserRole.student:
                fields = self._clean(parse_payload(StudentProfileCreate, data).model_dump())
                row = await self.profiles.create_student_profile(db, principal.id, fields)
                response = StudentProfileResponse.model_validate(row)
            else:
                fields = self._clean(parse_payload(EmployerProfileCreate, data).model_dump())
                row = await self.profiles.create_employer_profile(db, principal.id, fields)
                response = EmployerProfileResponse.model_validate(row)
        except StorageConflict:
            raise ProfileConflict("Profile already exists")

        await record_event(db, action="profile_created", status="success", actor_id=principal.id,
                           entity_type="profile", entity_id=response.id)
        return response

    async def update_my_profile(self, db: AsyncSession, user: UnifiedUser, data: Dict[str, Any]) -> ProfileResponse:
        if user.role == UserRole.student:
            fields = self._clean(parse_payload(StudentProfileUpdate, data).model_dump(exclude_unset=True))
            row = await self.profiles.update_student_profile(db, user.id, fields)
            response_schema = StudentProfileResponse
        else:
            fields = self._clean(parse_payload(EmployerProfileUpdate, data).model_dump(exclude_unset=True))
            row = await self.profiles.update_employer_profile(db, user.id, fields)
            response_schema = EmployerProfileResponse
        if row is None:
            raise ProfileNotFound()
        logger.info(f"Profile of {user.id} updated: {sorted(fields)}")
        return response_schema.model_validate(row)

    async def upload_resume(self, db: AsyncSession, user: UnifiedUser, filename: str, content: bytes) -> StudentProfileResponse:
        if user.role != UserRole.student:
            raise RoleRequired(UserRole.student)
        if not content:
            raise ValidationError("Resume file is empty")
        if len(content) > MAX_RESUME_BYTES:
            raise ValidationError("Resume file is too large")

        key = resume_key(user.id, filename)
        url = self.storage.store(key, content)
        # One resume per student whatever its format
        for stale in stale_resume_keys(user.id, key):
            self.storage.delete(stale)
        row = await self.profiles.update_student_profile(db, user.id, {"resume_url": url})
        if row is None:
            raise ProfileNotFound()

        response = StudentProfileResponse.model_validate(row)
        await record_event(db, action="resume_uploaded", status="success", actor_id=user.id,
                           entity_type="profile", entity_id=row.id, details=key)
        return response

    @staticmethod
    def _single(rows):
        if not rows:
            raise ProfileNotFound("No profile found. Please create your profile.")
        if len(rows) > 1:
            raise ProfileConflict()
        return rows[0]

    @staticmethod
    def _clean(fields: Dict[str, Any]) -> Dict[str, Any]:
        for name in _NAME_FIELDS & fields.keys():
            if fields[name] is None:
                raise ValidationError(f"{name} cannot be empty")
            fields[name] = InputValidator.validate_display_name(fields[name])
        return fields
