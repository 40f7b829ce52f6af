from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_category_repository
from book_api.repositories import CategoryRepository
from book_api.schemas import BookRead, CategoryCreate, CategoryRead, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryRead])
async def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/books/{book_id}", response_model=list[CategoryRead])
async def get_categories_of_book(book_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    return (await repo.get_categories_of_book(book_id)).unwrap()


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    return (await repo.get(category_id)).unwrap()


@router.get("/{category_id}/books", response_model=list[BookRead])
async def get_books_of_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)):
    return (await repo.get_books(category_id)).unwrap()


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, repo: CategoryRepository = Depends(get_category_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_category(category_id: int, payload: CategoryUpdate,
                          repo: CategoryRepository = Depends(get_category_repository)) -> None:
    (await repo.update(category_id, **payload.model_dump())).unwrap()


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, repo: CategoryRepository = Depends(get_category_repository)) -> None:
    (await repo.delete(category_id)).unwrap()
