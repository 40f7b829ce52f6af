from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_country_repository
from book_api.repositories import CountryRepository
from book_api.schemas import AuthorRead, CountryCreate, CountryRead, CountryUpdate

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[CountryRead])
async def list_countries(repo: CountryRepository = Depends(get_country_repository)):
    return (await repo.list_all()).unwrap()


@router.get("/authors/{author_id}", response_model=CountryRead)
async def get_country_of_author(author_id: int, repo: CountryRepository = Depends(get_country_repository)):
    return (await repo.get_country_of_author(author_id)).unwrap()


@router.get("/{country_id}", response_model=CountryRead)
async def get_country(country_id: int, repo: CountryRepository = Depends(get_country_repository)):
    return (await repo.get(country_id)).unwrap()


@router.get("/{country_id}/authors", response_model=list[AuthorRead])
async def get_authors_of_country(country_id: int, repo: CountryRepository = Depends(get_country_repository)):
    return (await repo.get_authors(country_id)).unwrap()


@router.post("", response_model=CountryRead, status_code=status.HTTP_201_CREATED)
async def create_country(payload: CountryCreate, repo: CountryRepository = Depends(get_country_repository)):
    return (await repo.create(**payload.model_dump())).unwrap()


@router.put("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_country(country_id: int, payload: CountryUpdate,
                         repo: CountryRepository = Depends(get_country_repository)) -> None:
    (await repo.update(country_id, **payload.model_dump())).unwrap()


@router.delete("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_country(country_id: int, repo: CountryRepository = Depends(get_country_repository)) -> None:
    (await repo.delete(country_id)).unwrap()
