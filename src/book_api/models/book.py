"""
Book model plus the two join entities that resolve its many-to-many relations.

`BookAuthor` and `BookCategory` are full mapped classes (not bare `Table`s) because
repositories query, count and delete them directly: the cascade-block rules for authors
and categories are "does any join row reference this id?".

Foreign keys from the join rows to `books` cascade on delete (a book takes its edges
with it); the keys to `authors` / `categories` do not, so the store itself refuses to
orphan a join row if the application check is ever bypassed.
"""

from datetime import date
from sqlalchemy import Integer, String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from book_api.database.base import Base
from book_api.validators.normalizers import normalize_name
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .author import Author
    from .category import Category
    from .review import Review


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    isbn: Mapped[str] = mapped_column(String(20), nullable=False)

    # Normalized ISBN; unique across live rows. 3x the `isbn` length (casefold() expansion)
    isbn_key: Mapped[str] = mapped_column(String(60), unique=True, index=True, nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    published_on: Mapped[date | None] = mapped_column(Date, nullable=True)

    # --- Relationships ---

    author_links: Mapped[list["BookAuthor"]] = relationship(
        "BookAuthor",
        back_populates="book",
        passive_deletes=True,
        lazy="raise",
    )

    category_links: Mapped[list["BookCategory"]] = relationship(
        "BookCategory",
        back_populates="book",
        passive_deletes=True,
        lazy="raise",
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        passive_deletes=True,
        lazy="raise",
    )

    @validates("isbn")
    def _sync_isbn_key(self, key: str, value: str) -> str:
        self.isbn_key = normalize_name(value)
        return value

    def __repr__(self) -> str:
        return f"<Book(id={self.id!r}, isbn={self.isbn!r}, title={self.title!r})>"


class BookAuthor(Base):
    """One Book <-> Author edge. Identity is the (book_id, author_id) pair."""
    __tablename__ = "book_authors"

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id"),
        primary_key=True,
        index=True
    )

    book: Mapped["Book"] = relationship("Book", back_populates="author_links", lazy="raise")
    author: Mapped["Author"] = relationship("Author", back_populates="book_links", lazy="raise")

    def __repr__(self) -> str:
        return f"<BookAuthor(book_id={self.book_id!r}, author_id={self.author_id!r})>"


class BookCategory(Base):
    """One Book <-> Category edge. Identity is the (book_id, category_id) pair."""
    __tablename__ = "book_categories"

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        primary_key=True,
        index=True
    )

    book: Mapped["Book"] = relationship("Book", back_populates="category_links", lazy="raise")
    category: Mapped["Category"] = relationship("Category", back_populates="book_links", lazy="raise")

    def __repr__(self) -> str:
        return f"<BookCategory(book_id={self.book_id!r}, category_id={self.category_id!r})>"
