from typing import Optional

from sqlalchemy import delete
from sqlalchemy.future import select

from unigig.models.user import User, UserRole
from unigig.models.revoked_token import RevokedToken
from unigig.repositories.base import storage_guard


async def get_user_by_email(db, email: str) -> Optional[User]:
    async with storage_guard(db, "user lookup"):
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

async def get_user_by_id(db, user_id: str) -> Optional[User]:
    async with storage_guard(db, "user lookup"):
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

async def create_user(db, email: str, hashed_password: str, role: UserRole) -> User:
    """Create the credential record and commit to DB."""
    new_user = User(
        email=email,
        role=role,
        hashed_password=hashed_password
    )
    async with storage_guard(db, "credential creation"):
        db.add(new_user)
        await db.commit()
        await db.refresh(new_user)
    return new_user

async def delete_user(db, user_id: str) -> bool:
    async with storage_guard(db, "credential deletion"):
        result = await db.execute(delete(User).where(User.id == user_id))
        await db.commit()
    return result.rowcount > 0

async def revoke_token(db, jti: str, user_id: Optional[str] = None) -> None:
    async with storage_guard(db, "token revocation"):
        db.add(RevokedToken(jti=jti, user_id=user_id))
        await db.commit()

async def is_token_revoked(db, jti: str) -> bool:
    async with storage_guard(db, "token lookup"):
        result = await db.execute(select(RevokedToken.id).where(RevokedToken.jti == jti))
        return result.scalar_one_or_none() is not None
