from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_author_repository
from book_api.repositories import AuthorRepository
from book_api.schemas import AuthorCreate, AuthorRead, AuthorUpdate, BookRead

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", response_model=list[AuthorRead])
async def list_authors(repo: AuthorRepository = Depends(get_author_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/books/{book_id}", response_model=list[AuthorRead])
async def get_authors_of_book(book_id: int, repo: AuthorRepository = Depends(get_author_repository)):
    return (await repo.get_authors_of_book(book_id)).unwrap()


@router.get("/{author_id}", response_model=AuthorRead)
async def get_author(author_id: int, repo: AuthorRepository = Depends(get_author_repository)):
    return (await repo.get(author_id)).unwrap()


@router.get("/{author_id}/books", response_model=list[BookRead])
async def get_books_of_author(author_id: int, repo: AuthorRepository = Depends(get_author_repository)):
    return (await repo.get_books(author_id)).unwrap()


@router.post("", response_model=AuthorRead, status_code=status.HTTP_201_CREATED)
async def create_author(payload: AuthorCreate, repo: AuthorRepository = Depends(get_author_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_author(author_id: int, payload: AuthorUpdate,
                        repo: AuthorRepository = Depends(get_author_repository)) -> None:
    (await repo.update(author_id, **payload.model_dump())).unwrap()


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_author(author_id: int, repo: AuthorRepository = Depends(get_author_repository)) -> None:
    (await repo.delete(author_id)).unwrap()
