"""
Repository layer initialization module.

Usage:
    from book_api.repositories import BookRepository, CountryRepository
"""

from .base_repository import BaseRepository
from .named_repository import NamedEntityRepository
from .country_repository import CountryRepository
from .category_repository import CategoryRepository
from .author_repository import AuthorRepository
from .book_repository import BookRepository
from .reviewer_repository import ReviewerRepository
from .review_repository import ReviewRepository

__all__ = [
    "BaseRepository",
    "NamedEntityRepository",
    "CountryRepository",
    "CategoryRepository",
    "AuthorRepository",
    "BookRepository",
    "ReviewerRepository",
    "ReviewRepository",
]
