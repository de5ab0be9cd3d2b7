"""Transaction boundary shared by the write operations.

Every multi-row workflow step runs inside ``transaction`` so that it either
commits once or leaves nothing behind.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from millops.core.exceptions import ConstraintError, UnknownError, ValidationError

logger = logging.getLogger(__name__)


def _constraint_message(entity: str, exc: IntegrityError) -> str:
    detail = str(exc.orig).lower() if exc.orig is not None else ""
    if "unique" in detail or "duplicate" in detail:
        return f"{entity} with the same unique value already exists"
    if "foreign key" in detail:
        return f"{entity} references a record that does not exist"
    if "not null" in detail:
        return f"{entity} is missing a required value"
    return f"{entity} violates a database constraint"


@contextmanager
def transaction(db: Session, entity: str) -> Iterator[Session]:
    """Commit the work done in the block, or roll it back and raise a domain error.

    ``ValueError`` raised by model validators becomes ``ValidationError``;
    ``IntegrityError`` becomes ``ConstraintError``; any other store failure
    becomes ``UnknownError``. Domain errors raised inside the block roll back
    and propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except ValueError as e:
        db.rollback()
        raise ValidationError(str(e)) from e
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Constraint failure writing {entity}: {e.orig}")
        raise ConstraintError(_constraint_message(entity, e)) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error writing {entity}: {e}", exc_info=True)
        raise UnknownError(f"Could not save {entity}") from e
    except Exception:
        db.rollback()
        raise
