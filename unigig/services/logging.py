import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from unigig.core.exceptions import StorageError
from unigig.models import Log
from unigig.repositories.base import storage_guard

logger = logging.getLogger(__name__)


async def log_major_event(
    db: AsyncSession,
    action: str,
    status: str,
    actor_id: Optional[str],
    details: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
):
    """
    Record a major event in the audit table and the application log.
    Raises StorageError if the audit row cannot be written.
    """
    logger.info(
        f"{action} [{status}] actor={actor_id} entity={entity_type}:{entity_id} {details or ''}".rstrip())

    entry = Log(
        action=action,
        status=status,
        actor_id=actor_id,
        details=details,
        entity_type=entity_type,
        entity_id=entity_id,
    )
    async with storage_guard(db, "audit log write"):
        db.add(entry)
        await db.commit()
    return entry


async def record_event(db: AsyncSession, action: str, status: str, actor_id: Optional[str], **kwargs):
    """
    Audit a change that is already committed.

    A failed audit write is logged and does not turn the committed change into a failure.
    """
    try:
        return await log_major_event(db, action=action, status=status, actor_id=actor_id, **kwargs)
    except StorageError as e:
        logger.error(f"Audit write for {action} by {actor_id} failed after commit: {e}")
        return None
