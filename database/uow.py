import contextlib
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from database.database import SessionLocal
from database.repository import PortalRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def portal_uow(session_factory: Optional[sessionmaker] = None):
    """Per-unit-of-work transaction scope.

    Yields a PortalRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with portal_uow() as repo:
            job = repo.jobs.get_by_id(job_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = PortalRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        logger.debug("Unit of work rolled back")
        raise
    finally:
        session.close()
