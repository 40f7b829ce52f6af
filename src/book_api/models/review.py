from sqlalchemy import Integer, String, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from book_api.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .book import Book
    from .reviewer import Reviewer

MIN_RATING = 1
MAX_RATING = 5


class Review(Base):
    """
    SQLAlchemy model for a Review.

    Written by one reviewer about one book. Both parents cascade on delete.
    """
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint(f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}", name="rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    headline: Mapped[str] = mapped_column(String(200), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    reviewer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reviewers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    book: Mapped["Book"] = relationship("Book", back_populates="reviews", lazy="raise")
    reviewer: Mapped["Reviewer"] = relationship("Reviewer", back_populates="reviews", lazy="raise")

    def __repr__(self) -> str:
        return f"<Review(id={self.id!r}, book_id={self.book_id!r}, rating={self.rating!r})>"
