from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_review_repository
from book_api.repositories import ReviewRepository
from book_api.schemas import BookRead, ReviewCreate, ReviewRead, ReviewUpdate

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewRead])
async def list_reviews(repo: ReviewRepository = Depends(get_review_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/books/{book_id}", response_model=list[ReviewRead])
async def get_reviews_of_book(book_id: int, repo: ReviewRepository = Depends(get_review_repository)):
    return (await repo.get_reviews_of_book(book_id)).unwrap()


@router.get("/{review_id}", response_model=ReviewRead)
async def get_review(review_id: int, repo: ReviewRepository = Depends(get_review_repository)):
    return (await repo.get(review_id)).unwrap()


@router.get("/{review_id}/book", response_model=BookRead)
async def get_book_of_review(review_id: int, repo: ReviewRepository = Depends(get_review_repository)):
    return (await repo.get_book_of_review(review_id)).unwrap()


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(payload: ReviewCreate, repo: ReviewRepository = Depends(get_review_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_review(review_id: int, payload: ReviewUpdate,
                        repo: ReviewRepository = Depends(get_review_repository)) -> None:
    (await repo.update(review_id, **payload.model_dump())).unwrap()


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: int, repo: ReviewRepository = Depends(get_review_repository)) -> None:
    (await repo.delete(review_id)).unwrap()
