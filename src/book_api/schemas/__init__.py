from .catalogue import (
    CountryCreate,
    CountryUpdate,
    CountryRead,
    CategoryCreate,
    CategoryUpdate,
    CategoryRead,
    AuthorCreate,
    AuthorUpdate,
    AuthorRead,
)
from .books import BookCreate, BookUpdate, BookRead, BookRating
from .reviews import (
    ReviewerCreate,
    ReviewerUpdate,
    ReviewerRead,
    ReviewCreate,
    ReviewUpdate,
    ReviewRead,
)

__all__ = [
    "CountryCreate",
    "CountryUpdate",
    "CountryRead",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryRead",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorRead",
    "BookCreate",
    "BookUpdate",
    "BookRead",
    "BookRating",
    "ReviewerCreate",
    "ReviewerUpdate",
    "ReviewerRead",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewRead",
]
