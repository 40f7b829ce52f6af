import pytest

from book_api.models import Author, Book, Category, Country
from book_api.validators.model_fields import find_missing_fields, find_unknown_fields, get_required_columns
from book_api.validators.normalizers import normalize_name, to_lowercase, to_uppercase


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Fiction", "fiction"),
        ("  fiction ", "fiction"),
        ("STRASSE", "strasse"),
        ("Straße", "strasse"),  # casefold, not lower
        (None, None),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


def test_case_helpers_pass_none_through():
    assert to_uppercase("debug") == "DEBUG"
    assert to_lowercase("JSON") == "json"
    assert to_uppercase(None) is None


def test_country_keeps_key_in_sync():
    country = Country(name=" Côte d'Ivoire ")

    assert country.name == " Côte d'Ivoire "
    assert country.name_key == "côte d'ivoire"


def test_book_keeps_isbn_key_in_sync():
    book = Book(isbn="978-ABC", title="t")

    assert book.isbn_key == "978-abc"


def test_required_columns_skip_nullable():
    assert get_required_columns(Book, ["isbn", "title", "published_on"]) == ["isbn", "title"]


def test_find_missing_fields_treats_blank_as_missing():
    fields = {"first_name": " ", "last_name": "Eco", "country_id": None}

    assert find_missing_fields(Author, fields, ["first_name", "last_name", "country_id"]) == [
        "first_name",
        "country_id",
    ]


def test_find_unknown_fields_sorted():
    assert find_unknown_fields({"b": 1, "a": 2, "name": 3}, ["name"]) == ["a", "b"]


@pytest.mark.parametrize(
    "model, source, key",
    [(Country, "name", "name_key"), (Category, "name", "name_key"), (Book, "isbn", "isbn_key")],
)
def test_key_column_fits_longest_casefold(model, source, key):
    """A full-length value whose every character expands under casefold() still fits its key column."""
    columns = model.__table__.c
    longest = "ΐ" * columns[source].type.length  # casefolds to three code points

    assert len(normalize_name(longest)) <= columns[key].type.length


async def test_full_length_sharp_s_name_is_created(country_repository):
    outcome = await country_repository.create(name="ß" * 100)

    assert outcome.ok
    assert outcome.value.name_key == "ss" * 100
