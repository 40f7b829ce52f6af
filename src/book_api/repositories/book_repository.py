"""
Book repository.

Besides the shared CRUD operations a book owns two association sets (authors and
categories) and its reviews:

- create/update take the complete wanted `author_ids` / `category_ids` and reconcile
  the join rows in the same transaction as the book row. Only the delta is written:
  rows no longer wanted are deleted, missing rows are inserted, the rest are untouched.
- delete removes the book's reviews and join rows with it.
- `get_rating` averages the ratings of the book's reviews.
"""

import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.exceptions.base import DuplicateError, ValidationRejectedError, NotFoundError, PersistenceError
from book_api.models import Book, Author, Category, BookAuthor, BookCategory, Review
from book_api.validators.normalizers import normalize_name
from .base_repository import BaseRepository, case_insensitive

logger = logging.getLogger(__name__)


# association field -> (join model, join column pointing at the other side, other model)
ASSOCIATIONS = {
    "author_ids": (BookAuthor, BookAuthor.author_id, Author),
    "category_ids": (BookCategory, BookCategory.category_id, Category),
}


class BookRepository(BaseRepository[Book]):
    order_by = case_insensitive(Book.title)
    mutable_fields = ("isbn", "title", "published_on")

    def __init__(self, db: AsyncSession):
        super().__init__(Book, db)

    def describe(self, entity: Book) -> str:
        return f"Book {entity.title!r}"

    # =================================================================================================================
    # Create / Update with association reconciliation
    # =================================================================================================================

    @returns_outcome
    async def create(self, author_ids: Iterable[int] = (), category_ids: Iterable[int] = (), **fields) -> Book:
        """
        Insert a book linked to at least one author and one category.

        Raises (as Outcome):
            REJECTED: duplicate ISBN, empty author/category set, bad fields.
            NOT_FOUND: an author or category id does not exist.
        """
        wanted = {"author_ids": set(author_ids), "category_ids": set(category_ids)}
        empty = [name for name, ids in wanted.items() if not ids]
        if empty:
            logger.info(
                "repo.create.missing_associations",
                extra={"model": self.model_name, "operation": "create", "fields": empty},
            )
            raise ValidationRejectedError("A book needs at least one author and one category", fields=empty)

        await self._check_associations(wanted)

        async def link(book: Book) -> None:
            await self._reconcile(book.id, wanted)

        return await self._insert(fields, after_flush=link)

    @returns_outcome
    async def update(self, entity_id: int, author_ids: Iterable[int] | None = None,
                     category_ids: Iterable[int] | None = None, **fields) -> Book:
        """
        Full replace of the book row. An association set passed as None is left as is;
        an empty set removes every link of that kind.
        """
        wanted = {
            name: set(ids)
            for name, ids in (("author_ids", author_ids), ("category_ids", category_ids))
            if ids is not None
        }
        await self._check_associations(wanted)

        async def relink(book: Book) -> None:
            await self._reconcile(book.id, wanted)

        return await self._replace(entity_id, fields, after_flush=relink)

    async def validate_create(self, fields: dict) -> None:
        await self._check_duplicate_isbn(None, fields["isbn"], "create")

    async def validate_update(self, entity: Book, fields: dict) -> None:
        await self._check_duplicate_isbn(entity.id, fields["isbn"], "update")

    async def before_delete(self, entity_id: int) -> None:
        await self.db.execute(delete(Review).where(Review.book_id == entity_id))
        await self.db.execute(delete(BookAuthor).where(BookAuthor.book_id == entity_id))
        await self.db.execute(delete(BookCategory).where(BookCategory.book_id == entity_id))
        logger.debug("repo.delete.cascade", extra={"model": self.model_name, "id": entity_id})

    async def _check_duplicate_isbn(self, book_id: int | None, isbn: str, operation: str) -> None:
        if await self.validator.is_duplicate_isbn(book_id, isbn):
            logger.info(
                f"repo.{operation}.duplicate_isbn",
                extra={"model": self.model_name, "operation": operation, "id": book_id},
            )
            raise DuplicateError(f"A book with ISBN {isbn.strip()!r} already exists", fields=["isbn"])

    async def _check_associations(self, wanted: dict[str, set[int]]) -> None:
        for name, ids in wanted.items():
            _, _, other = ASSOCIATIONS[name]
            missing = await self.validator.missing_ids(other, ids)
            if missing:
                logger.info(
                    "repo.associations.not_found",
                    extra={"model": self.model_name, "reference": other.__name__, "ids": missing},
                )
                raise NotFoundError(
                    f"{other.__name__}(s) not found: {', '.join(str(i) for i in missing)}",
                    fields=[name],
                )

    async def _reconcile(self, book_id: int, wanted: dict[str, set[int]]) -> None:
        """Bring each association set of `book_id` to exactly `wanted[name]`."""
        for name, ids in wanted.items():
            join_model, other_column, _ = ASSOCIATIONS[name]
            result = await self.db.execute(select(other_column).where(join_model.book_id == book_id))
            current = set(result.scalars().all())

            stale = current - ids
            if stale:
                await self.db.execute(
                    delete(join_model).where(join_model.book_id == book_id, other_column.in_(stale))
                )
            fresh = ids - current
            self.db.add_all(
                join_model(**{"book_id": book_id, other_column.key: other_id}) for other_id in sorted(fresh)
            )
            await self.db.flush()

            logger.debug(
                "repo.associations.reconciled",
                extra={"model": self.model_name, "id": book_id, "association": name,
                       "removed": sorted(stale), "added": sorted(fresh)},
            )

    # =================================================================================================================
    # Lookups
    # =================================================================================================================

    @returns_outcome
    async def get_by_isbn(self, isbn: str) -> Book:
        books = await self.find_where(Book.isbn_key == normalize_name(isbn))
        if not books:
            logger.info("repo.get_by_isbn.not_found", extra={"model": self.model_name, "isbn": isbn})
            raise NotFoundError(f"Book with ISBN {isbn!r} not found", fields=["isbn"])
        return books[0]

    @returns_outcome
    async def get_rating(self, book_id: int) -> Decimal:
        """Mean rating of the book's reviews; Decimal(0) when it has none."""
        await self._require(Book, book_id, "book_id")
        try:
            result = await self.db.execute(
                select(func.count(Review.id), func.sum(Review.rating)).where(Review.book_id == book_id)
            )
            count, total = result.one()
        except Exception as e:
            logger.error(f"Error computing rating for Book {book_id}: {e}")
            raise PersistenceError(f"Failed to compute rating for Book {book_id}") from e

        if not count:
            return Decimal(0)
        return Decimal(total) / Decimal(count)
