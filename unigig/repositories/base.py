import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from unigig.core.exceptions import StorageError, StorageConflict

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_guard(db, action: str):
    """Roll back and re-raise SQLAlchemy failures as storage errors.

    A query that succeeds with zero rows never passes through here as an error.
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity violation during {action}: {e.orig}")
        raise StorageConflict(f"Conflicting data during {action}") from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Storage failure during {action}: {str(e)}")
        raise StorageError(f"Storage failure during {action}") from e
