import pytest

from book_api.exceptions.base import InvalidFieldError, PersistenceError
from book_api.models import Author, Book, Category, Country, Reviewer
from book_api.validators.consistency import ConsistencyValidator


@pytest.fixture
def validator(db_session) -> ConsistencyValidator:
    return ConsistencyValidator(db_session)


class TestExistsById:

    async def test_existing_and_missing(self, validator, make_country):
        country = await make_country()

        assert await validator.exists_by_id(Country, country.id) is True
        assert await validator.exists_by_id(Country, 10_101) is False

    async def test_none_id_does_not_exist(self, validator):
        assert await validator.exists_by_id(Country, None) is False

    async def test_missing_ids(self, validator, make_author):
        a1, a2 = await make_author(), await make_author()

        assert await validator.missing_ids(Author, {a1.id, a2.id, 50_001, 50_000}) == [50_000, 50_001]
        assert await validator.missing_ids(Author, set()) == []


class TestDuplicateName:

    async def test_create_candidate(self, validator, make_category):
        await make_category(name="Science Fiction")

        assert await validator.is_duplicate_name(Category, None, "  science fiction") is True
        assert await validator.is_duplicate_name(Category, None, "Science") is False

    async def test_candidate_excludes_itself(self, validator, make_category):
        category = await make_category(name="Essay")

        assert await validator.is_duplicate_name(Category, category.id, "ESSAY") is False
        assert await validator.is_duplicate_name(Category, category.id + 1, "ESSAY") is True

    async def test_model_without_unique_name(self, validator):
        with pytest.raises(InvalidFieldError):
            await validator.is_duplicate_name(Reviewer, None, "x")

    async def test_duplicate_isbn(self, validator, make_book):
        book = await make_book(isbn="0-306-40615-2")

        assert await validator.is_duplicate_isbn(None, "0-306-40615-2 ") is True
        assert await validator.is_duplicate_isbn(book.id, "0-306-40615-2") is False


class TestHasDependents:

    async def test_country_with_author(self, validator, make_country, make_author):
        country = await make_country()
        assert await validator.has_dependents(Country, country.id) is False

        await make_author(country_id=country.id)

        assert await validator.has_dependents(Country, country.id) is True

    async def test_category_and_author_with_book(self, validator, make_author, make_category, make_book):
        author, category = await make_author(), await make_category()
        await make_book(author_ids=[author.id], category_ids=[category.id])

        assert await validator.has_dependents(Author, author.id) is True
        assert await validator.has_dependents(Category, category.id) is True

    async def test_models_without_blocking_relation(self, validator, make_book):
        book = await make_book()

        assert await validator.has_dependents(Book, book.id) is False
        assert await validator.has_dependents(Reviewer, 1) is False


async def test_storage_fault_is_persistence_error(validator, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(validator.db, "execute", broken_execute)

    with pytest.raises(PersistenceError):
        await validator.exists_by_id(Country, 1)
