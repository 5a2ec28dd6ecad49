"""
Shared fixtures: a throwaway SQLite database per test and helpers to sign users up.

Settings are read when unigig is first imported, so the environment is
prepared before any project import below.
"""
import os
import tempfile

_scratch = tempfile.mkdtemp(prefix="unigig-tests-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_scratch}/default.db"
os.environ["RESUME_DIR"] = os.path.join(_scratch, "resumes")
os.environ["PUBLIC_BASE_URL"] = "http://test"

import pytest
from httpx import AsyncClient, ASGITransport

from unigig.db.base import Base
from unigig.db.database import build_engine, build_session_factory, get_db
from unigig.models.user import UserRole
from unigig.services.auth.auth_service import AuthService
import unigig.models  # noqa: F401

PASSWORD = "secret-pass-1"


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth():
    return AuthService()


@pytest.fixture
def signup(db, auth):
    """Sign a user up through the auth service and return the unified user."""
    async def _signup(email, role, name):
        result = await auth.sign_up(db, email, PASSWORD, role, name)
        return result.user
    return _signup


@pytest.fixture
async def employer(signup):
    return await signup("acme@example.com", UserRole.employer, "Acme Labs")


@pytest.fixture
async def other_employer(signup):
    return await signup("globex@example.com", UserRole.employer, "Globex")


@pytest.fixture
async def student(signup):
    return await signup("sam@example.com", UserRole.student, "Sam Student")


@pytest.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
