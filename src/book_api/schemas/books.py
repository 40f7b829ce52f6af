from datetime import date

from pydantic import BaseModel, ConfigDict


class BookCreate(BaseModel):
    isbn: str
    title: str
    published_on: date | None = None
    # Complete wanted sets; the repository reconciles the join rows to match
    author_ids: list[int]
    category_ids: list[int]


class BookUpdate(BookCreate):
    id: int | None = None


class BookRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    isbn: str
    title: str
    published_on: date | None = None


class BookRating(BaseModel):
    book_id: int
    # Mean of the review ratings; 0 when the book has no reviews
    rating: float
