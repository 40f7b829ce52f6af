"""
Consistency checks run before every mutating repository operation.

One validator serves every entity type. What differs per type is data, not code:

- `UNIQUE_KEYS`: which column holds the normalized unique key (Country/Category name,
  Book ISBN).
- `DEPENDENTS`: which rows block deletion (Authors for a Country, BookCategory rows
  for a Category, BookAuthor rows for an Author).

All checks read the state visible to the session at call time and take no locks. A
concurrent writer can slip in between check and commit; the UNIQUE constraints on the
key columns turn that into a persistence failure at commit instead of a silent
duplicate.
"""

import logging
from typing import Any

from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.exceptions.base import PersistenceError, InvalidFieldError
from book_api.models import Country, Category, Author, Book, BookAuthor, BookCategory
from .normalizers import normalize_name

logger = logging.getLogger(__name__)


# model -> normalized key column
UNIQUE_KEYS = {
    Country: Country.name_key,
    Category: Category.name_key,
    Book: Book.isbn_key,
}

# model -> (dependent model, foreign key column on the dependent)
DEPENDENTS = {
    Country: (Author, Author.country_id),
    Category: (BookCategory, BookCategory.category_id),
    Author: (BookAuthor, BookAuthor.author_id),
}


class ConsistencyValidator:
    """
    Existence, duplicate-name and cascade-block predicates over an AsyncSession.

    Every method returns a plain bool. Storage faults surface as PersistenceError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_by_id(self, model: type, entity_id: Any) -> bool:
        """True iff a row of `model` with this id exists."""
        if entity_id is None:
            return False
        stmt = select(exists().where(model.id == entity_id))
        found = bool(await self._scalar(stmt, model, "exists_by_id"))
        logger.debug(
            "validator.exists_by_id",
            extra={"model": model.__name__, "id": entity_id, "exists": found},
        )
        return found

    async def missing_ids(self, model: type, ids: set[int]) -> list[int]:
        """Ids from `ids` with no matching row, sorted. One query for the whole set."""
        if not ids:
            return []
        try:
            result = await self.db.execute(select(model.id).where(model.id.in_(ids)))
        except Exception as e:
            logger.error(f"Error checking {model.__name__} ids {sorted(ids)}: {e}")
            raise PersistenceError(f"Failed to check {model.__name__} existence") from e
        return sorted(ids - set(result.scalars().all()))

    async def is_duplicate_name(self, model: type, candidate_id: int | None, name: str) -> bool:
        """
        True iff another row of `model` (id != candidate_id) has the same normalized name.

        `candidate_id=None` means the row does not exist yet (create).
        """
        key_column = UNIQUE_KEYS.get(model)
        if key_column is None:
            raise InvalidFieldError(f"{model.__name__} has no unique name", fields=["name"])

        conditions = [key_column == normalize_name(name)]
        if candidate_id is not None:
            conditions.append(model.id != candidate_id)

        duplicate = bool(await self._scalar(select(exists().where(*conditions)), model, "is_duplicate_name"))
        if duplicate:
            logger.info(
                "validator.duplicate_name",
                extra={"model": model.__name__, "candidate_id": candidate_id, "value": name},
            )
        return duplicate

    async def is_duplicate_isbn(self, book_id: int | None, isbn: str) -> bool:
        return await self.is_duplicate_name(Book, book_id, isbn)

    async def has_dependents(self, model: type, entity_id: int) -> bool:
        """
        True iff at least one row still references this entity through a blocking relation.

        Models without a blocking relation (Book, Reviewer, Review) always return False;
        their dependents are cascaded by the owning repository instead.
        """
        dependent = DEPENDENTS.get(model)
        if dependent is None:
            return False

        dependent_model, fk_column = dependent
        blocked = bool(await self._scalar(select(exists().where(fk_column == entity_id)), model, "has_dependents"))
        logger.debug(
            "validator.has_dependents",
            extra={"model": model.__name__, "id": entity_id, "dependent": dependent_model.__name__, "blocked": blocked},
        )
        return blocked

    async def _scalar(self, stmt, model: type, check: str):
        try:
            result = await self.db.execute(stmt)
            return result.scalar()
        except Exception as e:
            logger.error(f"Error running {check} for {model.__name__}: {e}")
            raise PersistenceError(f"Failed to validate {model.__name__}") from e
