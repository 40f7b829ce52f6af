from book_api.core.outcome import OutcomeKind


class TestAuthorReferences:

    async def test_create_requires_existing_country(self, author_repository):
        outcome = await author_repository.create(first_name="Jorge", last_name="Borges", country_id=55_555)

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.error.fields == ["country_id"]
        assert await author_repository.count() == 0

    async def test_update_to_missing_country_is_not_found(self, author_repository, make_author):
        author = await make_author()

        outcome = await author_repository.update(
            author.id, first_name=author.first_name, last_name=author.last_name, country_id=55_555
        )

        assert outcome.kind is OutcomeKind.NOT_FOUND

    async def test_update_moves_author_to_other_country(self, author_repository, make_author, make_country):
        author = await make_author()
        other = await make_country()

        outcome = await author_repository.update(
            author.id, first_name=author.first_name, last_name=author.last_name, country_id=other.id
        )

        assert outcome.ok
        assert outcome.value.country_id == other.id


class TestAuthorDelete:

    async def test_delete_author_of_a_book_is_conflict(self, author_repository, make_author, make_book):
        """
        Behavior:
                - An author linked to a book through BookAuthor cannot be deleted.

        Importance:
                - Books must never list a missing author.
        """
        # Arrange
        author = await make_author(first_name="Toni", last_name="Morrison")
        await make_book(author_ids=[author.id])

        # Act
        outcome = await author_repository.delete(author.id)

        # Assert
        assert outcome.kind is OutcomeKind.CONFLICT
        assert outcome.reason == "Author Toni Morrison cannot be deleted because it is used by at least one book"
        assert await author_repository.exists(author.id)

    async def test_delete_author_without_books(self, author_repository, make_author):
        author = await make_author()

        assert (await author_repository.delete(author.id)).ok


class TestAuthorRelations:

    async def test_get_books(self, author_repository, make_author, make_book):
        author = await make_author()
        await make_book(title="Beloved", author_ids=[author.id])
        await make_book(title="Sula", author_ids=[author.id])

        outcome = await author_repository.get_books(author.id)

        assert [b.title for b in outcome.value] == ["Beloved", "Sula"]

    async def test_get_authors_of_book(self, author_repository, make_author, make_book):
        first = await make_author(first_name="Terry", last_name="Pratchett")
        second = await make_author(first_name="Neil", last_name="Gaiman")
        book = await make_book(author_ids=[first.id, second.id])

        outcome = await author_repository.get_authors_of_book(book.id)

        assert [a.last_name for a in outcome.value] == ["Gaiman", "Pratchett"]

    async def test_get_books_of_missing_author(self, author_repository):
        outcome = await author_repository.get_books(777)

        assert outcome.kind is OutcomeKind.NOT_FOUND
