from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fitbook.errors import Conflict, StorageError
from fitbook.models import Base
from fitbook.settings import get_settings
from fitbook.utils.logging_utils import log

engine = create_engine(get_settings().DATABASE_CONNECTION_STRING)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=engine):
    Base.metadata.create_all(bind=bind)


def commit(db: Session, conflict_message: Optional[str] = None):
    """
    Commit the pending unit of work, rolling back on failure.

    Constraint violations are reported as a Conflict when the caller knows what the
    conflicting state means, any other database failure becomes a StorageError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if conflict_message is not None:
            log.warning(f"Constraint violated: {conflict_message}")
            raise Conflict(conflict_message) from e
        log.error(f"Integrity error on commit: {e.orig}")
        raise StorageError("Failed to save changes", str(e.orig)) from e
    except SQLAlchemyError as e:
        db.rollback()
        log.error(f"Database error on commit: {e}")
        raise StorageError("Failed to save changes", str(e)) from e
