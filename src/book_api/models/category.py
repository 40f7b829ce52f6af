from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from book_api.database.base import Base
from book_api.validators.normalizers import normalize_name
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .book import BookCategory


class Category(Base):
    """
    SQLAlchemy model for Category (genre).

    Linked to books through `BookCategory`; protected from deletion while linked.
    """
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Normalized copy of `name` carrying the UNIQUE constraint
    # casefold() maps one character to up to three ("ß" -> "ss"): 3x the `name` length
    name_key: Mapped[str] = mapped_column(String(300), unique=True, index=True, nullable=False)

    # --- Relationships ---

    book_links: Mapped[list["BookCategory"]] = relationship(
        "BookCategory",
        back_populates="category",
        lazy="raise",
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        self.name_key = normalize_name(value)
        return value

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
