"""
Country repository.

Countries are referenced by authors; a country with at least one author cannot be
deleted. Also serves the two country/author relationship reads.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.exceptions.base import NotFoundError
from book_api.models import Country, Author
from .base_repository import case_insensitive
from .named_repository import NamedEntityRepository

logger = logging.getLogger(__name__)


class CountryRepository(NamedEntityRepository[Country]):
    order_by = (Country.name_key, Country.name)
    dependent_label = "author"

    def __init__(self, db: AsyncSession):
        super().__init__(Country, db)

    @returns_outcome
    async def get_authors(self, country_id: int) -> list[Author]:
        """Authors attached to a country, by last name then first name."""
        await self._require(Country, country_id, "country_id")
        query = (
            select(Author)
            .where(Author.country_id == country_id)
            .order_by(*case_insensitive(Author.last_name, Author.first_name))
        )
        return await self._fetch_all(query)

    @returns_outcome
    async def get_country_of_author(self, author_id: int) -> Country:
        query = select(Country).join(Author, Author.country_id == Country.id).where(Author.id == author_id)
        countries = await self._fetch_all(query)
        if not countries:
            logger.info("repo.country_of_author.not_found", extra={"model": "Author", "id": author_id})
            raise NotFoundError(f"Author with id {author_id} not found", fields=["author_id"])
        return countries[0]
