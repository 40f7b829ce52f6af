"""
Typed results for repository operations.

Every public repository operation returns an `Outcome` instead of raising for expected
business conditions. The outcome carries one of five kinds:

| Kind                  | Meaning                                                  |
| --------------------- | -------------------------------------------------------- |
| `OK`                  | the operation succeeded; `value` holds the payload       |
| `NOT_FOUND`           | the entity (or an entity it references) does not exist   |
| `REJECTED`            | a business rule refused the operation, nothing written   |
| `CONFLICT`            | delete vetoed by live dependents                         |
| `PERSISTENCE_FAILURE` | the store failed; the session was rolled back            |

Failed outcomes keep the originating `RepositoryError` in `error`, so a transport layer
can reuse its `to_payload()` / `http_status()` (see `book_api.api.v1.error_handlers`).
"""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

from book_api.exceptions.base import (
    RepositoryError,
    ValidationRejectedError,
    NotFoundError,
    ConflictError,
)

T = TypeVar("T")


class OutcomeKind(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    CONFLICT = "conflict"
    PERSISTENCE_FAILURE = "persistence_failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: T | None = None
    error: RepositoryError | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @property
    def reason(self) -> str | None:
        """Human-readable reason for a failed outcome."""
        return self.error.message if self.error is not None else None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeKind.OK, value=value)

    @classmethod
    def from_error(cls, error: RepositoryError) -> "Outcome[Any]":
        # Order matters: the specific kinds before the RepositoryError fallback
        if isinstance(error, NotFoundError):
            kind = OutcomeKind.NOT_FOUND
        elif isinstance(error, ConflictError):
            kind = OutcomeKind.CONFLICT
        elif isinstance(error, ValidationRejectedError):
            kind = OutcomeKind.REJECTED
        else:
            kind = OutcomeKind.PERSISTENCE_FAILURE
        return cls(kind, error=error)

    def unwrap(self) -> T:
        """Return the payload, or raise the stored error for a failed outcome."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def returns_outcome(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[Outcome[T]]]:
    """
    Decorate an async repository method so that its return value becomes `Outcome.success(...)`
    and any RepositoryError it raises becomes the matching failed Outcome.

    Anything that is not a RepositoryError is a bug and propagates unchanged.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Outcome[T]:
        try:
            return Outcome.success(await func(*args, **kwargs))
        except RepositoryError as exc:
            return Outcome.from_error(exc)

    return wrapper
