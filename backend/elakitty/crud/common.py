# backend/elakitty/crud/common.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from elakitty.errors import ExternalServiceError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, what: str) -> None:
    """Commit, or roll back and report the storage failure to the caller."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Storage write failed (%s): %s", what, e)
        raise ExternalServiceError(f"Could not save {what}")
