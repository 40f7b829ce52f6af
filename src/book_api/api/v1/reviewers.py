from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_reviewer_repository
from book_api.repositories import ReviewerRepository
from book_api.schemas import ReviewerCreate, ReviewerRead, ReviewerUpdate, ReviewRead

router = APIRouter(prefix="/reviewers", tags=["reviewers"])


@router.get("", response_model=list[ReviewerRead])
async def list_reviewers(repo: ReviewerRepository = Depends(get_reviewer_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/{reviewer_id}", response_model=ReviewerRead)
async def get_reviewer(reviewer_id: int, repo: ReviewerRepository = Depends(get_reviewer_repository)):
    return (await repo.get(reviewer_id)).unwrap()


@router.get("/{reviewer_id}/reviews", response_model=list[ReviewRead])
async def get_reviews_of_reviewer(reviewer_id: int, repo: ReviewerRepository = Depends(get_reviewer_repository)):
    return (await repo.get_reviews(reviewer_id)).unwrap()


@router.get("/{review_id}/reviewer", response_model=ReviewerRead)
async def get_reviewer_of_review(review_id: int, repo: ReviewerRepository = Depends(get_reviewer_repository)):
    return (await repo.get_reviewer_of_review(review_id)).unwrap()


@router.post("", response_model=ReviewerRead, status_code=status.HTTP_201_CREATED)
async def create_reviewer(payload: ReviewerCreate, repo: ReviewerRepository = Depends(get_reviewer_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{reviewer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_reviewer(reviewer_id: int, payload: ReviewerUpdate,
                          repo: ReviewerRepository = Depends(get_reviewer_repository)) -> None:
    (await repo.update(reviewer_id, **payload.model_dump())).unwrap()


@router.delete("/{reviewer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reviewer(reviewer_id: int, repo: ReviewerRepository = Depends(get_reviewer_repository)) -> None:
    (await repo.delete(reviewer_id)).unwrap()
