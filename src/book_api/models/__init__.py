"""
Centralized access to all catalogue models.

Importing this package registers every table on `Base.metadata`, which both
`init_models()` and the test schema setup rely on.

    from book_api.models import Book, Author, Country
"""

from .country import Country
from .category import Category
from .author import Author
from .book import Book, BookAuthor, BookCategory
from .reviewer import Reviewer
from .review import Review

__all__ = [
    "Country",
    "Category",
    "Author",
    "Book",
    "BookAuthor",
    "BookCategory",
    "Reviewer",
    "Review",
]
