"""
Base repository class providing the operations every catalogue entity shares.

Two layers live here:

- Primitives (`get_by_id`, `get_all`, `find_where`, `exists`, `count`) that
  return plain values and raise `RepositoryError` subclasses. Subclasses build their
  own queries on top of them.
- The six public operations (`list_all`, `get`, `check_exists`, `create`, `update`,
  `delete`), decorated with `returns_outcome`, so callers receive an `Outcome` and never
  have to catch exceptions for expected business conditions.

Entity-specific rules plug in through hooks instead of overriding the operations:

    validate_create(fields)          business checks before an insert
    validate_update(entity, fields)  business checks before a full replace
    validate_delete(entity)          cascade-block check (default: dependents registry)
    before_delete(entity_id)         cascade the entity's own dependents

Every mutating operation commits its own unit of work inside `db_error_handler`, so a
returned `Outcome` always reflects what is durable in the store.
"""

import time
import logging
from typing import TypeVar, Generic, Type, Any, Awaitable, Callable, Iterable

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.database.base import Base
from book_api.exceptions.base import (
    ValidationRejectedError,
    InvalidFieldError,
    IdMismatchError,
    NotFoundError,
    ConflictError,
    PersistenceError,
)
from book_api.exceptions.mapper import db_error_handler
from book_api.validators.consistency import ConsistencyValidator
from book_api.validators.model_fields import find_unknown_fields, find_missing_fields

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

AfterFlush = Callable[[Any], Awaitable[None]]

logger = logging.getLogger(__name__)


def case_insensitive(*columns) -> tuple:
    """ORDER BY terms: alphabetical regardless of case, the raw values breaking ties."""
    return (*(func.lower(column) for column in columns), *columns)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository parameterised by model.

    Class attributes set by subclasses:
        order_by: columns used by `list_all()`, in priority order.
        mutable_fields: caller-writable columns. Anything else passed to create/update
            is rejected; updates overwrite every one of them (full replace).
        dependent_label: noun used in the conflict message when deletion is blocked.
    """

    order_by: tuple = ()
    mutable_fields: tuple[str, ...] = ()
    dependent_label: str = "record"

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: the SQLAlchemy model class (not an instance), used to build queries.
            db: the async session, one per request.
        """
        self.model = model
        self.db = db
        self.validator = ConsistencyValidator(db)

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Primitives
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
            entity = result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error retrieving {self.model_name} by ID {entity_id}: {e}")
            raise PersistenceError(f"Failed to retrieve {self.model_name}") from e

        logger.debug(f"Retrieved {self.model_name} by ID: {entity_id}")
        return entity

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            logger.info(
                "repo.get.not_found",
                extra={"model": self.model_name, "operation": "get", "id": entity_id},
            )
            raise NotFoundError(f"{self.model_name} with id {entity_id} not found", fields=["id"])
        return entity

    async def get_all(self) -> list[ModelType]:
        """All rows, ordered by `order_by` (falls back to id)."""
        query = select(self.model).order_by(*(self.order_by or (self.model.id,)))
        return await self._fetch_all(query)

    async def find_where(self, *conditions, order_by: Iterable | None = None) -> list[ModelType]:
        """
        Rows of this model matching every condition.

        Usage:
            await repo.find_where(Author.country_id == 3)
        """
        query = select(self.model).where(*conditions)
        query = query.order_by(*(order_by or self.order_by or (self.model.id,)))
        return await self._fetch_all(query)

    async def exists(self, entity_id: int) -> bool:
        return await self.validator.exists_by_id(self.model, entity_id)

    async def count(self, *conditions) -> int:
        try:
            result = await self.db.execute(select(func.count()).select_from(self.model).where(*conditions))
            count = result.scalar() or 0
        except Exception as e:
            logger.error(f"Error counting {self.model_name}: {e}")
            raise PersistenceError(f"Failed to count {self.model_name} entities") from e

        logger.debug(f"Counted {count} {self.model_name} entities")
        return count

    async def _fetch_all(self, query) -> list:
        try:
            result = await self.db.execute(query)
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error retrieving {self.model_name} entities: {e}")
            raise PersistenceError(f"Failed to retrieve {self.model_name} entities") from e

        logger.debug(f"Retrieved {len(rows)} {self.model_name} entities")
        return rows

    async def _require(self, model: type, entity_id: Any, field: str) -> None:
        """Raise NotFoundError unless a `model` row with this id exists."""
        if not await self.validator.exists_by_id(model, entity_id):
            logger.info(
                "repo.reference.not_found",
                extra={"model": self.model_name, "reference": model.__name__, "id": entity_id},
            )
            raise NotFoundError(f"{model.__name__} with id {entity_id} not found", fields=[field])

    def _check_fields(self, fields: dict, operation: str) -> None:
        unknown = find_unknown_fields(fields, self.mutable_fields)
        if unknown:
            logger.info(
                f"repo.{operation}.invalid_fields",
                extra={"model": self.model_name, "operation": operation, "invalid_fields": unknown},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        missing = find_missing_fields(self.model, fields, self.mutable_fields)
        if missing:
            logger.info(
                f"repo.{operation}.missing_required",
                extra={"model": self.model_name, "operation": operation, "missing_fields": missing},
            )
            raise ValidationRejectedError(
                f"Missing required field(s): {', '.join(missing)} for {self.model_name}",
                fields=missing,
            )

    # =================================================================================================================
    # Hooks
    # =================================================================================================================

    async def validate_create(self, fields: dict) -> None:
        pass

    async def validate_update(self, entity: ModelType, fields: dict) -> None:
        pass

    async def validate_delete(self, entity: ModelType) -> None:
        """Refuse the delete while blocking dependents exist (see `DEPENDENTS`)."""
        if await self.validator.has_dependents(self.model, entity.id):
            logger.info(
                "repo.delete.conflict",
                extra={"model": self.model_name, "operation": "delete", "id": entity.id},
            )
            raise ConflictError(
                f"{self.describe(entity)} cannot be deleted because it is used by at least one {self.dependent_label}"
            )

    async def before_delete(self, entity_id: int) -> None:
        pass

    def describe(self, entity: ModelType) -> str:
        return f"{self.model_name} {entity.id}"

    # =================================================================================================================
    # Public operations
    # =================================================================================================================

    @returns_outcome
    async def list_all(self) -> list[ModelType]:
        return await self.get_all()

    @returns_outcome
    async def get(self, entity_id: int) -> ModelType:
        return await self.get_by_id_or_raise(entity_id)

    @returns_outcome
    async def check_exists(self, entity_id: int) -> bool:
        return await self.exists(entity_id)

    @returns_outcome
    async def create(self, **fields) -> ModelType:
        """
        Validate and insert a new entity, then commit. Logging:
        - DEBUG: start event with the provided keys (not values).
        - INFO: business rejections (raised by the checks and hooks).
        - INFO: success event with the assigned id and duration_ms.
        """
        return await self._insert(fields)

    @returns_outcome
    async def update(self, entity_id: int, **fields) -> ModelType:
        """
        Full replace of every mutable field. A payload `id`, if present, must equal
        `entity_id`; absent nullable fields are cleared.
        """
        return await self._replace(entity_id, fields)

    @returns_outcome
    async def delete(self, entity_id: int) -> bool:
        """Delete after the cascade-block check passes. Own dependents go with it."""
        logger.debug(
            "repo.delete.start",
            extra={"model": self.model_name, "operation": "delete", "id": entity_id},
        )
        entity = await self.get_by_id_or_raise(entity_id)
        await self.validate_delete(entity)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            await self.before_delete(entity_id)
            await self.db.execute(delete(self.model).where(self.model.id == entity_id))
            await self.db.commit()

        logger.info(
            "repo.delete.success",
            extra={
                "model": self.model_name,
                "operation": "delete",
                "id": entity_id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return True

    # =================================================================================================================
    # Write helpers shared with subclasses that extend create/update
    # =================================================================================================================

    async def _insert(self, fields: dict, after_flush: AfterFlush | None = None) -> ModelType:
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(fields)},
        )
        self._check_fields(fields, "create")
        await self.validate_create(fields)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            entity = self.model(**fields)
            self.db.add(entity)
            # flush assigns the id the join rows need
            await self.db.flush()
            if after_flush is not None:
                await after_flush(entity)
            await self.db.commit()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def _replace(self, entity_id: int, fields: dict, after_flush: AfterFlush | None = None) -> ModelType:
        logger.debug(
            "repo.update.start",
            extra={"model": self.model_name, "operation": "update", "id": entity_id, "provided_keys": sorted(fields)},
        )
        fields = dict(fields)
        payload_id = fields.pop("id", None)
        if payload_id is not None and payload_id != entity_id:
            logger.info(
                "repo.update.id_mismatch",
                extra={"model": self.model_name, "operation": "update", "id": entity_id, "payload_id": payload_id},
            )
            raise IdMismatchError(f"Payload id {payload_id} does not match {self.model_name} id {entity_id}")

        self._check_fields(fields, "update")
        entity = await self.get_by_id_or_raise(entity_id)
        await self.validate_update(entity, fields)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            for name in self.mutable_fields:
                setattr(entity, name, fields.get(name))
            await self.db.flush()
            if after_flush is not None:
                await after_flush(entity)
            await self.db.commit()

        logger.info(
            "repo.update.success",
            extra={
                "model": self.model_name,
                "operation": "update",
                "id": entity_id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity
