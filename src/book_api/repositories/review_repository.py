"""
Review repository.

A review is valid only while both its book and its reviewer exist and its rating
lies in MIN_RATING..MAX_RATING. Reviews have no dependents of their own.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.exceptions.base import ValidationRejectedError, NotFoundError
from book_api.models import Review, Book, Reviewer
from book_api.models.review import MIN_RATING, MAX_RATING
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    order_by = (Review.id,)
    mutable_fields = ("headline", "text", "rating", "book_id", "reviewer_id")

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def validate_create(self, fields: dict) -> None:
        await self._validate(fields, "create")

    async def validate_update(self, entity: Review, fields: dict) -> None:
        await self._validate(fields, "update")

    async def _validate(self, fields: dict, operation: str) -> None:
        rating = fields["rating"]
        # bool is an int subclass; True must not pass as a rating of 1
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            logger.info(
                f"repo.{operation}.invalid_rating",
                extra={"model": self.model_name, "operation": operation, "rating": rating},
            )
            raise ValidationRejectedError(
                f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}",
                fields=["rating"],
            )
        await self._require(Book, fields["book_id"], "book_id")
        await self._require(Reviewer, fields["reviewer_id"], "reviewer_id")

    @returns_outcome
    async def get_reviews_of_book(self, book_id: int) -> list[Review]:
        await self._require(Book, book_id, "book_id")
        return await self.find_where(Review.book_id == book_id)

    @returns_outcome
    async def get_book_of_review(self, review_id: int) -> Book:
        query = select(Book).join(Review, Review.book_id == Book.id).where(Review.id == review_id)
        books = await self._fetch_all(query)
        if not books:
            raise NotFoundError(f"Review with id {review_id} not found", fields=["review_id"])
        return books[0]
