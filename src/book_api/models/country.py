from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from book_api.database.base import Base
from book_api.validators.normalizers import normalize_name
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .author import Author


class Country(Base):
    """
    SQLAlchemy model for Country.

    A country is referenced by authors; it cannot be deleted while any author points at it.
    """
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Display name, stored exactly as supplied
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Normalized name (trimmed, case-folded). Maintained by `_sync_name_key`; the UNIQUE
    # constraint backs the repository-level duplicate check.
    # casefold() maps one character to up to three ("ß" -> "ss"): 3x the `name` length
    name_key: Mapped[str] = mapped_column(String(300), unique=True, index=True, nullable=False)

    # --- Relationships ---

    # One-to-Many: authors born in / attached to this country.
    # lazy="raise": async sessions cannot lazy load, query explicitly instead.
    authors: Mapped[list["Author"]] = relationship(
        "Author",
        back_populates="country",
        lazy="raise",
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        self.name_key = normalize_name(value)
        return value

    def __repr__(self) -> str:
        return f"<Country(id={self.id!r}, name={self.name!r})>"
