import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import (
    AuthError, DuplicateEmail, InvalidCredentials, StorageConflict, ValidationError,
)
from unigig.core.security import verify_password, get_password_hash, create_access_token, decode_token
from unigig.core.validators import InputValidator
from unigig.db.database import get_db
from unigig.models.user import User, UserRole
from unigig.repositories import user_repo
from unigig.repositories.profile_repo import ProfileRepository
from unigig.schemas.user_schema import AuthResponse, UnifiedUser
from unigig.services.auth.AuthInterface import IAuthService
from unigig.services.auth.role_resolver import RoleResolver
from unigig.services.logging import record_event

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


class AuthService(IAuthService):
    def __init__(self, resolver: RoleResolver = None, profiles=ProfileRepository):
        self.resolver = resolver or RoleResolver(profiles=profiles)
        self.profiles = profiles

    async def sign_up(self, db: AsyncSession, email: str, password: str, role, display_name: str) -> AuthResponse:
        """
        Create a credential and its single role profile as one unit.

        The credential is committed first; if the profile insert fails it is
        deleted again before the error propagates, so no principal is left
        without a profile.
        """
        email = InputValidator.validate_email(email)
        password = InputValidator.validate_password(password)
        display_name = InputValidator.validate_display_name(display_name)
        try:
            role = UserRole(getattr(role, "value", role))
        except ValueError:
            raise ValidationError("Invalid role")

        if await user_repo.get_user_by_email(db, email):
            raise DuplicateEmail()

        try:
            principal = await user_repo.create_user(
                db, email=email, hashed_password=get_password_hash(password), role=role
            )
        except StorageConflict:
            # Lost a race with a concurrent sign-up for the same email
            raise DuplicateEmail()
        # A failed insert rolls the session back and expires principal
        principal_id = principal.id

        try:
            await self._create_role_profile(db, principal, display_name)
        except Exception:
            logger.error(f"Profile creation failed for {principal_id}; rolling back credential")
            await self._rollback_credential(db, principal_id)
            raise

        user = UnifiedUser(id=principal.id, email=principal.email, role=role, display_name=display_name)
        response = AuthResponse(token=self._issue_token(principal), user=user)

        await record_event(
            db,
            action="user_signed_up",
            status="success",
            actor_id=principal.id,
            details=f"Registered as {role.value}",
            entity_type="user",
            entity_id=principal.id,
        )
        return response

    async def sign_in(self, db: AsyncSession, email: str, password: str) -> AuthResponse:
        if not password or not password.strip():
            raise ValidationError("Password is required")
        email = InputValidator.validate_email(email)

        principal = await user_repo.get_user_by_email(db, email)
        if not principal or not verify_password(password, principal.hashed_password):
            logger.info(f"Failed sign-in for {email}")
            raise InvalidCredentials()

        user = await self.resolver.resolve_user(db, principal)
        return AuthResponse(token=self._issue_token(principal), user=user)

    async def sign_out(self, db: AsyncSession, token: str) -> None:
        payload = decode_token(token) if token else None
        jti = payload.get("jti") if payload else None
        if jti and not await user_repo.is_token_revoked(db, jti):
            await user_repo.revoke_token(db, jti, payload.get("sub"))

    async def authenticate(self, db: AsyncSession, token: str) -> User:
        """Principal behind an access token, without resolving its role."""
        payload = decode_token(token) if token else None
        if not payload or "sub" not in payload:
            raise InvalidCredentials("Invalid authentication credentials")
        jti = payload.get("jti")
        if jti and await user_repo.is_token_revoked(db, jti):
            raise AuthError("Token has been revoked. Please log in again.")
        principal = await user_repo.get_user_by_id(db, payload["sub"])
        if not principal:
            raise InvalidCredentials("Invalid authentication credentials")
        return principal

    async def current_session(self, db: AsyncSession, token: str) -> UnifiedUser:
        principal = await self.authenticate(db, token)
        return await self.resolver.resolve_user(db, principal)

    async def _create_role_profile(self, db: AsyncSession, principal: User, display_name: str):
        if principal.role == UserRole.student:
            return await self.profiles.create_student_profile(db, principal.id, {"full_name": display_name})
        return await self.profiles.create_employer_profile(db, principal.id, {"company_name": display_name})

    async def _rollback_credential(self, db: AsyncSession, principal_id: str) -> None:
        try:
            await user_repo.delete_user(db, principal_id)
        except Exception:
            logger.critical(f"Could not delete credential {principal_id} after failed sign-up")
            raise

    @staticmethod
    def _issue_token(principal: User) -> str:
        return create_access_token({
            "sub": principal.id,
            "email": principal.email,
            "role": principal.role.value,
        })


auth_service = AuthService()


async def get_current_principal(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    return await auth_service.authenticate(db, token)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> UnifiedUser:
    return await auth_service.current_session(db, token)
