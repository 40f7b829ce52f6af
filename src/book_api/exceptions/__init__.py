from .base import (
    RepositoryError,
    ValidationRejectedError,
    DuplicateError,
    InvalidFieldError,
    IdMismatchError,
    NotFoundError,
    ConflictError,
    PersistenceError,
)

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
