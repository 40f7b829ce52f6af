import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    ConstraintKind,
    classify_integrity_error,
    extract_columns_from_integrity,
)
from .base import RepositoryError, PersistenceError

logger = logging.getLogger(__name__)


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> PersistenceError:
    """
    Build the PersistenceError for an IntegrityError raised by the store.

    Business rules are checked before every write, so a constraint firing here means
    the check was bypassed or lost a race; the caller sees a persistence failure, the
    logs see which constraint fired.
    """
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    log_extra = {"model": model_part, "fields": columns, "constraint": constraint_name, "kind": kind.value}

    if kind is ConstraintKind.UNIQUE:
        # Two writers passed the duplicate check concurrently
        logger.warning("mapper.unique_race_detected", extra=log_extra)
        message = f"{model_part} could not be saved: a concurrent write claimed the same value"
    elif kind is ConstraintKind.FOREIGN_KEY:
        logger.warning("mapper.foreign_key_violation", extra=log_extra)
        message = f"{model_part} could not be saved: a referenced record no longer exists"
    elif kind is ConstraintKind.UNKNOWN:
        logger.warning("mapper.unknown_integrity_error", extra=log_extra)
        logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
        message = f"{model_part} database integrity error"
    else:
        logger.warning("mapper.constraint_violation", extra=log_extra)
        message = f"{model_part} could not be saved: {kind.value.replace('_', ' ')} constraint violated"

    return PersistenceError(message, fields=columns, constraint=constraint_name)


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may fail ...

    Rolls the session back on any storage fault and raises PersistenceError.
    RepositoryErrors raised inside the block (business rejections) are re-raised
    unchanged after the rollback.
    """
    try:
        yield
    except RepositoryError:
        await _safe_rollback(db, model_name)
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise map_integrity_error(exc, model_name) from exc
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise PersistenceError(f"Failed to operate on {model_name or 'database'}") from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})
