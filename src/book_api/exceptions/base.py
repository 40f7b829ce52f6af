# book_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError and the four outcome kinds)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   └── mapper.py                  # Map storage faults to PersistenceError + db_error_handler
"""
Repository-level exceptions.

Repositories raise these internally; the public repository operations convert them
into an `Outcome` (see `book_api.core.outcome`) so callers never have to catch
exceptions for expected business conditions.

Taxonomy:
    ValidationRejectedError   rejected by a business rule (duplicate name/ISBN, bad input, id mismatch)
    NotFoundError             the entity, or an entity it references, does not exist
    ConflictError             delete blocked by live dependents
    PersistenceError          the store failed for reasons outside the business rules
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['name'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'conflict') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_input": 422,
        "duplicate": 422,
        "invalid_field": 422,
        "id_mismatch": 400,
        "not_found": 404,
        "conflict": 409,
        "persistence_failure": 500,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses:
            {"detail": "...", "code": "duplicate", "fields": ["name"]}
        The constraint name is deliberately left out of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class ValidationRejectedError(RepositoryError):
    """A business rule rejected the operation before anything was written."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str = "invalid_input"):
        super().__init__(message, fields=fields, error_code=error_code)


class DuplicateError(ValidationRejectedError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="duplicate")


class InvalidFieldError(ValidationRejectedError):
    """Raised when the caller passes unknown fields to a repository method."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class IdMismatchError(ValidationRejectedError):
    """The id in the payload does not match the id being updated."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields or ["id"], error_code="id_mismatch")


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class ConflictError(RepositoryError):
    """Delete vetoed because other rows still reference the entity."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="conflict")


class PersistenceError(RepositoryError):
    """The store rejected or failed the write/read (commit failure, lost uniqueness race, I/O error)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="persistence_failure")


__all__ = [
    "RepositoryError",
    "ValidationRejectedError",
    "DuplicateError",
    "InvalidFieldError",
    "IdMismatchError",
    "NotFoundError",
    "ConflictError",
    "PersistenceError",
]
