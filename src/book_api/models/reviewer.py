from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from book_api.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .review import Review


class Reviewer(Base):
    """
    SQLAlchemy model for Reviewer.

    Deleting a reviewer deletes every review they wrote.
    """
    __tablename__ = "reviewers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # --- Relationships ---

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="reviewer",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Reviewer(id={self.id!r}, first_name={self.first_name!r}, last_name={self.last_name!r})>"
