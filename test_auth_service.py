#!/usr/bin/env python3
"""
Tests for sign-up, sign-in, sign-out and token authentication
"""
from unittest.mock import Mock, AsyncMock, patch

import pytest

from unigig.core.exceptions import (
    AuthError, DuplicateEmail, InvalidCredentials, ProfileNotFound, StorageError, ValidationError,
)
from unigig.core.security import create_access_token, decode_token, get_password_hash
from unigig.models.user import UserRole
from unigig.repositories import user_repo
from unigig.repositories.profile_repo import ProfileRepository
from unigig.services.auth.auth_service import AuthService
from unigig.services.auth.role_resolver import RoleResolver

PASSWORD = "secret-pass-1"


async def test_employer_sign_up_and_sign_in(db, auth):
    """Acme Labs registers as an employer and signs back in with the same view"""
    registered = await auth.sign_up(db, "Acme@Example.com", PASSWORD, UserRole.employer, "Acme Labs")

    assert registered.user.role == UserRole.employer
    assert registered.user.display_name == "Acme Labs"
    assert registered.user.email == "acme@example.com"
    assert registered.token_type == "bearer"

    employers = await ProfileRepository.list_employer_profiles(db, registered.user.id)
    assert [p.company_name for p in employers] == ["Acme Labs"]
    assert await ProfileRepository.list_student_profiles(db, registered.user.id) == []

    signed_in = await auth.sign_in(db, "acme@example.com", PASSWORD)
    assert signed_in.user == registered.user
    assert signed_in.token != registered.token


async def test_student_sign_up_creates_student_profile(db, auth):
    result = await auth.sign_up(db, "sam@example.com", PASSWORD, "student", "  Sam   Student ")

    assert result.user.role == UserRole.student
    assert result.user.display_name == "Sam Student"
    students = await ProfileRepository.list_student_profiles(db, result.user.id)
    assert students[0].full_name == "Sam Student"


async def test_token_carries_principal_claims(db, auth):
    result = await auth.sign_up(db, "sam@example.com", PASSWORD, UserRole.student, "Sam Student")
    payload = decode_token(result.token)

    assert payload["sub"] == result.user.id
    assert payload["role"] == "student"
    assert payload["jti"]


async def test_duplicate_email_rejected(db, auth, student):
    with pytest.raises(DuplicateEmail):
        await auth.sign_up(db, "SAM@example.com", PASSWORD, UserRole.employer, "Sam Co")


@pytest.mark.parametrize("email,password,name", [
    ("not-an-email", PASSWORD, "Sam"),
    ("sam@example.com", "short", "Sam"),
    # 40 characters but 80 bytes
    ("sam@example.com", "\u00e9" * 40, "Sam"),
    ("sam@example.com", PASSWORD, " "),
])
async def test_sign_up_input_validation(db, auth, email, password, name):
    with pytest.raises(ValidationError):
        await auth.sign_up(db, email, password, UserRole.student, name)


async def test_sign_up_rejects_unknown_role(db, auth):
    with pytest.raises(ValidationError):
        await auth.sign_up(db, "sam@example.com", PASSWORD, "admin", "Sam Student")


async def test_failed_profile_creation_removes_credential(db):
    """No principal is left behind without a profile"""
    profiles = Mock()
    profiles.create_student_profile = AsyncMock(side_effect=StorageError("disk full"))
    auth = AuthService(profiles=profiles)

    with pytest.raises(StorageError):
        await auth.sign_up(db, "sam@example.com", PASSWORD, UserRole.student, "Sam Student")

    assert await user_repo.get_user_by_email(db, "sam@example.com") is None


@pytest.mark.parametrize("email,password", [
    ("acme@example.com", "wrong-password"),
    ("nobody@example.com", PASSWORD),
])
async def test_bad_credentials_rejected(db, auth, employer, email, password):
    with pytest.raises(InvalidCredentials):
        await auth.sign_in(db, email, password)


async def test_sign_in_without_profile_raises_profile_not_found(db, auth):
    await user_repo.create_user(db, "orphan@example.com", get_password_hash(PASSWORD), UserRole.employer)
    with pytest.raises(ProfileNotFound):
        await auth.sign_in(db, "orphan@example.com", PASSWORD)


async def test_sign_out_revokes_token(db, auth, employer):
    result = await auth.sign_in(db, "acme@example.com", PASSWORD)
    assert (await auth.current_session(db, result.token)).id == employer.id

    await auth.sign_out(db, result.token)
    # Signing out twice is harmless
    await auth.sign_out(db, result.token)

    with pytest.raises(AuthError) as exc_info:
        await auth.current_session(db, result.token)
    assert "revoked" in exc_info.value.message


async def test_garbage_and_foreign_tokens_rejected(db, auth):
    with pytest.raises(InvalidCredentials):
        await auth.authenticate(db, "not-a-jwt")
    with pytest.raises(InvalidCredentials):
        await auth.authenticate(db, create_access_token({"sub": "ghost"}))


async def test_employer_sign_up_resolves_to_employer(db, auth):
    result = await auth.sign_up(db, "hello@acme.example", PASSWORD, UserRole.employer, "Acme")
    resolved = await RoleResolver().resolve(db, result.user.id)

    assert (resolved.role, resolved.display_name) == (UserRole.employer, "Acme")


async def test_profile_insert_failure_after_rollback_removes_credential(db):
    """The storage layer rolls the session back before the error reaches sign-up"""
    async def failing_insert(session, user_id, data):
        await session.rollback()
        raise StorageError("insert failed")

    profiles = Mock()
    profiles.create_student_profile = failing_insert
    with pytest.raises(StorageError):
        await AuthService(profiles=profiles).sign_up(db, "sam@example.com", PASSWORD, UserRole.student, "Sam Student")

    assert await user_repo.get_user_by_email(db, "sam@example.com") is None


async def test_audit_failure_does_not_fail_committed_sign_up(db, auth):
    """A lost audit row is logged; the committed account is still reported as created"""
    with patch("unigig.services.logging.log_major_event", AsyncMock(side_effect=StorageError("audit down"))):
        result = await auth.sign_up(db, "sam@example.com", PASSWORD, UserRole.student, "Sam Student")

    assert result.user.display_name == "Sam Student"
    assert (await auth.sign_in(db, "sam@example.com", PASSWORD)).user.id == result.user.id
