import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.models import Category, Book, BookCategory
from .base_repository import case_insensitive
from .named_repository import NamedEntityRepository

logger = logging.getLogger(__name__)


class CategoryRepository(NamedEntityRepository[Category]):
    """Categories (genres). Blocked from deletion while any book is filed under them."""

    order_by = (Category.name_key, Category.name)
    dependent_label = "book"

    def __init__(self, db: AsyncSession):
        super().__init__(Category, db)

    @returns_outcome
    async def get_books(self, category_id: int) -> list[Book]:
        await self._require(Category, category_id, "category_id")
        query = (
            select(Book)
            .join(BookCategory, BookCategory.book_id == Book.id)
            .where(BookCategory.category_id == category_id)
            .order_by(*case_insensitive(Book.title))
        )
        return await self._fetch_all(query)

    @returns_outcome
    async def get_categories_of_book(self, book_id: int) -> list[Category]:
        await self._require(Book, book_id, "book_id")
        query = (
            select(Category)
            .join(BookCategory, BookCategory.category_id == Category.id)
            .where(BookCategory.book_id == book_id)
            .order_by(Category.name_key, Category.name)
        )
        return await self._fetch_all(query)
