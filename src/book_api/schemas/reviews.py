from pydantic import BaseModel, ConfigDict


class ReviewerCreate(BaseModel):
    first_name: str
    last_name: str


class ReviewerUpdate(ReviewerCreate):
    id: int | None = None


class ReviewerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class ReviewCreate(BaseModel):
    headline: str
    text: str
    # Range is checked by the repository so the rejection uses the common error body
    rating: int
    book_id: int
    reviewer_id: int


class ReviewUpdate(ReviewCreate):
    id: int | None = None


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    headline: str
    text: str
    rating: int
    book_id: int
    reviewer_id: int
