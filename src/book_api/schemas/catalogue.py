"""
Request/response schemas for countries, categories and authors.

Business rules (uniqueness, blank names, references) are enforced by the
repositories, not here; the schemas only fix the shape of the payload.
"""

from pydantic import BaseModel, ConfigDict


class NamedPayload(BaseModel):
    name: str


class NamedUpdate(NamedPayload):
    # Optional echo of the path id; must match it when present
    id: int | None = None


class NamedRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CountryCreate(NamedPayload):
    pass


class CountryUpdate(NamedUpdate):
    pass


class CountryRead(NamedRead):
    pass


class CategoryCreate(NamedPayload):
    pass


class CategoryUpdate(NamedUpdate):
    pass


class CategoryRead(NamedRead):
    pass


class AuthorCreate(BaseModel):
    first_name: str
    last_name: str
    country_id: int


class AuthorUpdate(AuthorCreate):
    id: int | None = None


class AuthorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    country_id: int
