from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_book_repository
from book_api.repositories import BookRepository
from book_api.schemas import BookCreate, BookRating, BookRead, BookUpdate

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[BookRead])
async def list_books(repo: BookRepository = Depends(get_book_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/isbn/{isbn}", response_model=BookRead)
async def get_book_by_isbn(isbn: str, repo: BookRepository = Depends(get_book_repository)):
    return (await repo.get_by_isbn(isbn)).unwrap()


# `/rating/{book_id}` kept for existing clients; registered before `/{book_id}`
@router.get("/rating/{book_id}", response_model=BookRating)
@router.get("/{book_id}/rating", response_model=BookRating)
async def get_book_rating(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    rating = (await repo.get_rating(book_id)).unwrap()
    return BookRating(book_id=book_id, rating=float(rating))


@router.get("/{book_id}", response_model=BookRead)
async def get_book(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    return (await repo.get(book_id)).unwrap()


@router.post("", response_model=BookRead, status_code=status.HTTP_201_CREATED)
async def create_book(payload: BookCreate, repo: BookRepository = Depends(get_book_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_book(book_id: int, payload: BookUpdate, repo: BookRepository = Depends(get_book_repository)) -> None:
    (await repo.update(book_id, **payload.model_dump())).unwrap()


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: int, repo: BookRepository = Depends(get_book_repository)) -> None:
    (await repo.delete(book_id)).unwrap()
