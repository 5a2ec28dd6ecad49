from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from unigig.core.config import settings


def build_engine(database_url: str, echo: bool = False):
    engine = create_async_engine(database_url, echo=echo, future=True)
    if database_url.startswith("sqlite"):
        # SQLite ignores foreign keys (and the profile/role pairing built on them) unless asked
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return engine


def build_session_factory(bind):
    return sessionmaker(
        bind=bind, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)

# Dependency for FastAPI routes


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
