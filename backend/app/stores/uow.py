import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError, TrackerError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, action: str, commit: bool = True):
    """Run a block as one transaction: commit on success, full rollback on error.

    Tracker errors pass through untouched; driver/ORM failures surface as
    StorageError. Nothing is retried here.
    """
    try:
        yield
        if commit:
            db.commit()
    except TrackerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed, transaction rolled back", action)
        raise StorageError(f"{action} failed") from e
