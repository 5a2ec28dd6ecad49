#!/usr/bin/env python3
"""
Tests for resolving a principal to its student or employer view
"""
from unittest.mock import Mock, AsyncMock

import pytest

from unigig.core.exceptions import (
    InvalidCredentials, ProfileConflict, ProfileNotFound, StorageConflict, StorageError,
)
from unigig.models.user import UserRole
from unigig.repositories import user_repo
from unigig.repositories.profile_repo import ProfileRepository
from unigig.services.auth.role_resolver import RoleResolver


class MockPrincipal:
    """Credential record stand-in"""

    def __init__(self, id="user-1", email="user@example.com", role=UserRole.student):
        self.id = id
        self.email = email
        self.role = role


def mock_profiles(students=(), employers=()):
    profiles = Mock()
    profiles.list_student_profiles = AsyncMock(return_value=list(students))
    profiles.list_employer_profiles = AsyncMock(return_value=list(employers))
    return profiles


async def test_student_profile_wins_when_both_exist():
    """A principal with rows in both tables resolves as a student"""
    profiles = mock_profiles(
        students=[Mock(full_name="Sam Student")],
        employers=[Mock(company_name="Acme Labs")],
    )
    user = await RoleResolver(profiles=profiles).resolve_user(None, MockPrincipal())

    assert user.role == UserRole.student
    assert user.display_name == "Sam Student"
    profiles.list_employer_profiles.assert_not_awaited()


async def test_employer_profile_used_when_no_student_profile():
    profiles = mock_profiles(employers=[Mock(company_name="Acme Labs")])
    user = await RoleResolver(profiles=profiles).resolve_user(None, MockPrincipal(email="acme@example.com"))

    assert user.role == UserRole.employer
    assert user.display_name == "Acme Labs"
    assert user.email == "acme@example.com"
    assert user.is_employer and not user.is_student


async def test_no_profile_raises_profile_not_found():
    with pytest.raises(ProfileNotFound):
        await RoleResolver(profiles=mock_profiles()).resolve_user(None, MockPrincipal())


@pytest.mark.parametrize("students,employers", [
    ([Mock(full_name="A"), Mock(full_name="B")], []),
    ([], [Mock(company_name="A"), Mock(company_name="B")]),
])
async def test_duplicate_rows_raise_profile_conflict(students, employers):
    with pytest.raises(ProfileConflict):
        await RoleResolver(profiles=mock_profiles(students, employers)).resolve_user(None, MockPrincipal())


async def test_storage_failure_is_not_reported_as_missing_profile():
    """A failing lookup must surface as StorageError, never as 'no profile'"""
    profiles = mock_profiles(employers=[Mock(company_name="Acme Labs")])
    profiles.list_student_profiles = AsyncMock(side_effect=StorageError("connection lost"))

    with pytest.raises(StorageError) as exc_info:
        await RoleResolver(profiles=profiles).resolve_user(None, MockPrincipal())
    assert not isinstance(exc_info.value, ProfileNotFound)
    profiles.list_employer_profiles.assert_not_awaited()


async def test_unknown_principal_is_rejected():
    resolver = RoleResolver(profiles=mock_profiles(), get_user=AsyncMock(return_value=None))
    with pytest.raises(InvalidCredentials):
        await resolver.resolve(None, "missing-id")


async def test_resolve_against_database(db, student, employer):
    resolver = RoleResolver()

    resolved_student = await resolver.resolve(db, student.id)
    resolved_employer = await resolver.resolve(db, employer.id)

    assert resolved_student == student
    assert resolved_employer.role == UserRole.employer
    assert resolved_employer.display_name == "Acme Labs"


async def test_principal_without_profile_is_not_found(db):
    principal = await user_repo.create_user(db, "orphan@example.com", "x", UserRole.student)
    with pytest.raises(ProfileNotFound):
        await RoleResolver().resolve(db, principal.id)


async def test_storage_rejects_profile_of_the_other_role(db, student):
    """The profile tables only accept the role stored on the principal"""
    with pytest.raises(StorageConflict):
        await ProfileRepository.create_employer_profile(db, student.id, {"company_name": "Side Hustle"})

    assert await ProfileRepository.list_employer_profiles(db, student.id) == []
    assert (await RoleResolver().resolve(db, student.id)).role == UserRole.student


async def test_storage_rejects_second_profile_for_same_principal(db, student):
    with pytest.raises(StorageConflict):
        await ProfileRepository.create_student_profile(db, student.id, {"full_name": "Second Self"})
    assert len(await ProfileRepository.list_student_profiles(db, student.id)) == 1
