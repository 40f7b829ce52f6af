"""
Classify SQLAlchemy IntegrityErrors by the kind of constraint that fired.

Every integrity failure that reaches the store is a persistence failure for the caller
(the business checks already ran and passed), but the kind and the constraint name
matter for logs: a UNIQUE violation on `uq_countries_name_key` means two requests raced
past the duplicate-name check, a FOREIGN KEY violation means a referenced row vanished
between check and commit.

Postgres exposes a SQLSTATE (`pgcode`) and diagnostics; SQLite and MySQL only give a
message, which is matched heuristically.
"""

import logging
import re
from enum import Enum
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
PGCODE_TO_KIND = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
}

_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def _classify_from_postgres_diag(orig) -> tuple[ConstraintKind | None, str | None]:
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    kind = PGCODE_TO_KIND.get(pgcode)
    if kind is None:
        logger.warning(
            "Unknown Postgres integrity error code encountered",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return ConstraintKind.UNKNOWN, constraint_name

    logger.debug("Postgres integrity diagnostic", extra={"pgcode": pgcode, "constraint_name": constraint_name})
    return kind, constraint_name


def _classify_from_message(msg: str) -> ConstraintKind:
    normalized = (msg or "").lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Returns:
        (ConstraintKind, constraint name if the driver reports one)
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is not None:
        return kind, constraint_name

    return _classify_from_message(str(orig) if orig is not None else str(exc)), None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the column names involved, from the DB message.

    Handles:
      - Postgres: 'null value in column "name" ...' / 'Key (name_key)=(fiction) already exists.'
      - SQLite:   'UNIQUE constraint failed: countries.name_key'
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE | re.MULTILINE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]

    return None
