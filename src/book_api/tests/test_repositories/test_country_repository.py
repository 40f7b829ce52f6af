import pytest

from book_api.core.outcome import OutcomeKind
from book_api.exceptions.base import ConflictError, DuplicateError, PersistenceError


class TestCountryDuplicates:

    @pytest.mark.parametrize("second", ["norway", "NORWAY", "  Norway ", "Norway"])
    async def test_names_differing_in_case_or_outer_whitespace_are_duplicates(self, country_repository, second):
        """
        Behavior:
                - Create "Norway", then a second country whose name differs only by case
                  and/or surrounding whitespace.
                - The first is OK, the second REJECTED with a duplicate error on `name`.

        Importance:
                - Uniqueness is defined on the normalized name, not the raw string.
        """
        # Arrange
        first = await country_repository.create(name="Norway")

        # Act
        second_outcome = await country_repository.create(name=second)

        # Assert
        assert first.ok
        assert second_outcome.kind is OutcomeKind.REJECTED
        assert isinstance(second_outcome.error, DuplicateError)
        assert second_outcome.error.fields == ["name"]
        assert await country_repository.count() == 1

    async def test_name_stored_as_supplied(self, country_repository):
        outcome = await country_repository.create(name="  New Zealand ")

        assert outcome.value.name == "  New Zealand "
        assert outcome.value.name_key == "new zealand"

    async def test_update_to_own_name_in_other_case_is_allowed(self, country_repository, make_country):
        country = await make_country(name="Peru")

        outcome = await country_repository.update(country.id, name="PERU")

        assert outcome.ok
        assert outcome.value.name == "PERU"

    async def test_update_to_other_existing_name_is_rejected(self, country_repository, make_country):
        await make_country(name="Spain")
        portugal = await make_country(name="Portugal")

        outcome = await country_repository.update(portugal.id, name=" spain")

        assert outcome.kind is OutcomeKind.REJECTED
        assert (await country_repository.get(portugal.id)).value.name == "Portugal"

    async def test_lost_uniqueness_race_is_persistence_failure(self, country_repository, make_country, monkeypatch):
        """
        Behavior:
                - Simulate a concurrent writer slipping past the duplicate check by
                  making the check report "no duplicate".
                - The UNIQUE constraint on name_key then fails the write.

        Importance:
                - A lost check-then-act race must surface as PERSISTENCE_FAILURE, never as
                  a silently duplicated name, and the session must stay usable afterwards.
        """
        # Arrange
        await make_country(name="Kenya")

        async def no_duplicate(*args, **kwargs):
            return False

        monkeypatch.setattr(country_repository.validator, "is_duplicate_name", no_duplicate)

        # Act
        outcome = await country_repository.create(name="kenya")

        # Assert
        assert outcome.kind is OutcomeKind.PERSISTENCE_FAILURE
        assert isinstance(outcome.error, PersistenceError)
        assert "concurrent write" in outcome.reason
        assert outcome.error.http_status() == 500
        # session was rolled back to a usable state
        assert await country_repository.count() == 1


class TestCountryDelete:

    async def test_delete_with_author_is_conflict(self, country_repository, make_country, make_author):
        """
        Behavior:
                - A country referenced by one author cannot be deleted.

        Importance:
                - Cascade-block rule: authors must never point at a missing country.
        """
        # Arrange
        country = await make_country(name="Iceland")
        await make_author(country_id=country.id)

        # Act
        outcome = await country_repository.delete(country.id)

        # Assert
        assert outcome.kind is OutcomeKind.CONFLICT
        assert isinstance(outcome.error, ConflictError)
        assert outcome.reason == "Country 'Iceland' cannot be deleted because it is used by at least one author"
        assert await country_repository.exists(country.id)

    async def test_delete_unreferenced_country(self, country_repository, make_country):
        country = await make_country()

        outcome = await country_repository.delete(country.id)

        assert outcome.ok
        assert not await country_repository.exists(country.id)


class TestCountryRelations:

    async def test_get_authors(self, country_repository, make_country, make_author):
        country = await make_country()
        await make_author(country_id=country.id, first_name="Knut", last_name="Hamsun")
        await make_author(country_id=country.id, first_name="Sigrid", last_name="Undset")
        await make_author()  # another country

        outcome = await country_repository.get_authors(country.id)

        assert [a.last_name for a in outcome.value] == ["Hamsun", "Undset"]

    async def test_get_authors_of_missing_country(self, country_repository):
        outcome = await country_repository.get_authors(987_654)

        assert outcome.kind is OutcomeKind.NOT_FOUND

    async def test_get_country_of_author(self, country_repository, make_country, make_author):
        country = await make_country(name="Chile")
        author = await make_author(country_id=country.id)

        outcome = await country_repository.get_country_of_author(author.id)

        assert outcome.value.id == country.id

    async def test_get_country_of_missing_author(self, country_repository):
        outcome = await country_repository.get_country_of_author(987_654)

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.error.fields == ["author_id"]
