#!/usr/bin/env python3
"""
Create a demo employer with one open job and a demo student who applied to it.

Runs in-process against DATABASE_URL; the tables must already exist
(start the API once or run `alembic upgrade head`).
"""
import asyncio
import logging

from dotenv import load_dotenv
load_dotenv()

from unigig.core.exceptions import DuplicateEmail
from unigig.db.database import AsyncSessionLocal
from unigig.models.user import UserRole
from unigig.schemas.job_schema import JobCreate
from unigig.services.application_service import ApplicationService
from unigig.services.auth.session_store import AuthSessionStore
from unigig.services.job_service import JobService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PASSWORD = "Demo-pass-123"


async def ensure_user(store: AuthSessionStore, email: str, role: UserRole, name: str):
    try:
        return await store.sign_up(email, PASSWORD, role, name)
    except DuplicateEmail:
        return await store.sign_in(email, PASSWORD)


async def main():
    store = AuthSessionStore(AsyncSessionLocal)

    async def announce(event):
        logger.info(f"session event: {event.type.value} {event.user.email if event.user else ''}")

    store.subscribe(announce)

    employer = await ensure_user(store, "employer@unigig.dev", UserRole.employer, "Acme Labs")
    async with AsyncSessionLocal() as db:
        job = await JobService().create_job(db, employer, JobCreate(
            title="Data cleaning assistant",
            description="Help tidy survey datasets for a research project.",
            job_type="project",
            budget_min=100,
            budget_max=500,
        ))
    logger.info(f"Posted job {job.id} ({job.budget_display})")
    await store.sign_out()

    student = await ensure_user(store, "student@unigig.dev", UserRole.student, "Sam Student")
    async with AsyncSessionLocal() as db:
        application = await ApplicationService().apply(db, job.id, student, "Happy to help.")
    logger.info(f"Application {application.id} is {application.status.value}")
    await store.sign_out()


if __name__ == "__main__":
    asyncio.run(main())
