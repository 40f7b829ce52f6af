"""
Author repository.

Every author must point at an existing country, checked on create and update.
An author linked to at least one book cannot be deleted.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.models import Author, Book, BookAuthor, Country
from .base_repository import BaseRepository, case_insensitive

logger = logging.getLogger(__name__)


class AuthorRepository(BaseRepository[Author]):
    order_by = case_insensitive(Author.last_name, Author.first_name)
    mutable_fields = ("first_name", "last_name", "country_id")
    dependent_label = "book"

    def __init__(self, db: AsyncSession):
        super().__init__(Author, db)

    async def validate_create(self, fields: dict) -> None:
        await self._require(Country, fields["country_id"], "country_id")

    async def validate_update(self, entity: Author, fields: dict) -> None:
        await self._require(Country, fields["country_id"], "country_id")

    def describe(self, entity: Author) -> str:
        return f"Author {entity.first_name} {entity.last_name}"

    @returns_outcome
    async def get_books(self, author_id: int) -> list[Book]:
        await self._require(Author, author_id, "author_id")
        query = (
            select(Book)
            .join(BookAuthor, BookAuthor.book_id == Book.id)
            .where(BookAuthor.author_id == author_id)
            .order_by(*case_insensitive(Book.title))
        )
        return await self._fetch_all(query)

    @returns_outcome
    async def get_authors_of_book(self, book_id: int) -> list[Author]:
        await self._require(Book, book_id, "book_id")
        query = (
            select(Author)
            .join(BookAuthor, BookAuthor.author_id == Author.id)
            .where(BookAuthor.book_id == book_id)
            .order_by(*self.order_by)
        )
        return await self._fetch_all(query)
