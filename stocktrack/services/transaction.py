import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stocktrack.core.exceptions import (
    ConflictError,
    InventoryError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger("stocktrack.services")


@contextmanager
def transaction(db: Session, conflict_message: str = "SKU already exists"):
    """Commit the block as one unit of work, rolling back on any failure.

    Unique constraint violations surface as ``ConflictError``, other
    integrity violations as ``ValidationError`` and remaining database
    failures as ``StorageError``.
    """
    try:
        yield db
        db.commit()

    except InventoryError:
        db.rollback()
        raise

    except IntegrityError as exc:
        db.rollback()
        if "unique" in str(exc.orig).lower():
            raise ConflictError(conflict_message) from exc
        raise ValidationError(f"Constraint violated: {exc.orig}") from exc

    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database write failed")
        raise StorageError("Unable to complete database operation") from exc
