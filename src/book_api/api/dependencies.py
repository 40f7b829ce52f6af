from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.database.session import get_async_session
from book_api.repositories import (
    AuthorRepository,
    BookRepository,
    CategoryRepository,
    CountryRepository,
    ReviewRepository,
    ReviewerRepository,
)

# One repository per request, bound to the request's session


def get_country_repository(db: AsyncSession = Depends(get_async_session)) -> CountryRepository:
    return CountryRepository(db)


def get_category_repository(db: AsyncSession = Depends(get_async_session)) -> CategoryRepository:
    return CategoryRepository(db)


def get_author_repository(db: AsyncSession = Depends(get_async_session)) -> AuthorRepository:
    return AuthorRepository(db)


def get_book_repository(db: AsyncSession = Depends(get_async_session)) -> BookRepository:
    return BookRepository(db)


def get_reviewer_repository(db: AsyncSession = Depends(get_async_session)) -> ReviewerRepository:
    return ReviewerRepository(db)


def get_review_repository(db: AsyncSession = Depends(get_async_session)) -> ReviewRepository:
    return ReviewRepository(db)
