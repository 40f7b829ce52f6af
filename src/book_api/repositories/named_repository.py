"""
Repository base for entities identified to users by a unique display name
(Country, Category).

Uniqueness is checked on the normalized form (trimmed, case-folded), so
"Fiction" and " fiction " are the same name. The stored `name` keeps the
caller's spelling; only `name_key` is normalized.
"""

import logging

from book_api.exceptions.base import DuplicateError
from .base_repository import BaseRepository, ModelType

logger = logging.getLogger(__name__)


class NamedEntityRepository(BaseRepository[ModelType]):
    mutable_fields = ("name",)

    async def validate_create(self, fields: dict) -> None:
        await self._check_duplicate_name(None, fields["name"], "create")

    async def validate_update(self, entity: ModelType, fields: dict) -> None:
        await self._check_duplicate_name(entity.id, fields["name"], "update")

    async def _check_duplicate_name(self, candidate_id: int | None, name: str, operation: str) -> None:
        if await self.validator.is_duplicate_name(self.model, candidate_id, name):
            logger.info(
                f"repo.{operation}.duplicate_name",
                extra={"model": self.model_name, "operation": operation, "id": candidate_id},
            )
            raise DuplicateError(f"{self.model_name} {name.strip()!r} already exists", fields=["name"])

    def describe(self, entity: ModelType) -> str:
        return f"{self.model_name} {entity.name!r}"
