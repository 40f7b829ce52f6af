import logging

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.outcome import returns_outcome
from book_api.exceptions.base import NotFoundError
from book_api.models import Reviewer, Review
from .base_repository import BaseRepository, case_insensitive

logger = logging.getLogger(__name__)


class ReviewerRepository(BaseRepository[Reviewer]):
    """Reviewers own their reviews: deleting a reviewer deletes every review they wrote."""

    order_by = case_insensitive(Reviewer.last_name, Reviewer.first_name)
    mutable_fields = ("first_name", "last_name")

    def __init__(self, db: AsyncSession):
        super().__init__(Reviewer, db)

    async def before_delete(self, entity_id: int) -> None:
        result = await self.db.execute(delete(Review).where(Review.reviewer_id == entity_id))
        logger.debug(
            "repo.delete.cascade",
            extra={"model": self.model_name, "id": entity_id, "dependent": "Review", "rows": result.rowcount},
        )

    @returns_outcome
    async def get_reviews(self, reviewer_id: int) -> list[Review]:
        await self._require(Reviewer, reviewer_id, "reviewer_id")
        return await self._fetch_all(
            select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.id)
        )

    @returns_outcome
    async def get_reviewer_of_review(self, review_id: int) -> Reviewer:
        query = select(Reviewer).join(Review, Review.reviewer_id == Reviewer.id).where(Review.id == review_id)
        reviewers = await self._fetch_all(query)
        if not reviewers:
            raise NotFoundError(f"Review with id {review_id} not found", fields=["review_id"])
        return reviewers[0]
