from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from book_api.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .country import Country
    from .book import BookAuthor


class Author(Base):
    """
    SQLAlchemy model for Author.

    Belongs to exactly one country and writes any number of books (via `BookAuthor`).
    """
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # No ON DELETE action: deleting a referenced country must fail, not cascade
    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("countries.id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: each author has one country
    country: Mapped["Country"] = relationship(
        "Country",
        back_populates="authors",
        lazy="raise",
    )

    book_links: Mapped[list["BookAuthor"]] = relationship(
        "BookAuthor",
        back_populates="author",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id!r}, first_name={self.first_name!r}, last_name={self.last_name!r})>"
