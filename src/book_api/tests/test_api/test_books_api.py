PREFIX = "/api/v1"


async def _book_payload(make_author, make_category, **overrides) -> dict:
    payload = {
        "isbn": "978-0-14-118776-1",
        "title": "The Invisible Cities",
        "published_on": "1972-11-01",
        "author_ids": [(await make_author()).id],
        "category_ids": [(await make_category()).id],
    }
    payload.update(overrides)
    return payload


class TestBooksApi:

    async def test_create_links_authors_and_categories(self, client, make_author, make_category):
        payload = await _book_payload(make_author, make_category)

        response = await client.post(f"{PREFIX}/books", json=payload)

        assert response.status_code == 201
        book = response.json()
        assert book["title"] == "The Invisible Cities"
        assert book["published_on"] == "1972-11-01"

        authors = await client.get(f"{PREFIX}/authors/books/{book['id']}")
        categories = await client.get(f"{PREFIX}/categories/books/{book['id']}")
        assert [a["id"] for a in authors.json()] == payload["author_ids"]
        assert [c["id"] for c in categories.json()] == payload["category_ids"]

    async def test_create_without_authors_is_rejected(self, client, make_author, make_category):
        payload = await _book_payload(make_author, make_category, author_ids=[])

        response = await client.post(f"{PREFIX}/books", json=payload)

        assert response.status_code == 422
        assert response.json()["fields"] == ["author_ids"]

    async def test_create_with_unknown_category_is_404(self, client, make_author, make_category):
        payload = await _book_payload(make_author, make_category, category_ids=[818_181])

        response = await client.post(f"{PREFIX}/books", json=payload)

        assert response.status_code == 404
        assert response.json()["fields"] == ["category_ids"]

    async def test_duplicate_isbn_is_422(self, client, make_author, make_category):
        payload = await _book_payload(make_author, make_category)
        await client.post(f"{PREFIX}/books", json=payload)

        response = await client.post(f"{PREFIX}/books", json={**payload, "title": "Another title"})

        assert response.status_code == 422
        assert response.json()["code"] == "duplicate"

    async def test_lookup_by_isbn_ignores_case(self, client, make_book):
        book_id = (await make_book(isbn="0-8044-2957-X")).id

        response = await client.get(f"{PREFIX}/books/isbn/0-8044-2957-x")

        assert response.status_code == 200
        assert response.json()["id"] == book_id

    async def test_unknown_isbn_is_404(self, client):
        response = await client.get(f"{PREFIX}/books/isbn/nothing-here")

        assert response.status_code == 404

    async def test_update_replaces_links(self, client, make_book, make_author, make_category):
        book = await make_book()
        book_id, isbn, title = book.id, book.isbn, book.title
        new_author_id = (await make_author()).id
        new_category_id = (await make_category()).id

        response = await client.put(
            f"{PREFIX}/books/{book_id}",
            json={
                "isbn": isbn,
                "title": title,
                "author_ids": [new_author_id],
                "category_ids": [new_category_id],
            },
        )

        assert response.status_code == 204
        authors = await client.get(f"{PREFIX}/authors/books/{book_id}")
        assert [a["id"] for a in authors.json()] == [new_author_id]

    async def test_delete_book_is_204_then_404(self, client, make_review):
        book_id = (await make_review()).book_id

        deleted = await client.delete(f"{PREFIX}/books/{book_id}")

        assert deleted.status_code == 204
        assert (await client.get(f"{PREFIX}/books/{book_id}")).status_code == 404
        assert (await client.get(f"{PREFIX}/reviews/books/{book_id}")).status_code == 404


class TestRatingApi:

    async def test_mean_of_reviews(self, client, make_book, make_review):
        """
        Behavior:
                - Two reviews rated 3 and 5.
                - GET /books/{id}/rating answers 4.0.

        Fixtures:
                - make_book, make_review: committed rows on the test session.
        """
        # Arrange
        book_id = (await make_book()).id
        await make_review(book_id=book_id, rating=3)
        await make_review(book_id=book_id, rating=5)

        # Act
        response = await client.get(f"{PREFIX}/books/{book_id}/rating")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"book_id": book_id, "rating": 4.0}

    async def test_unreviewed_book_rates_zero(self, client, make_book):
        book_id = (await make_book()).id

        response = await client.get(f"{PREFIX}/books/{book_id}/rating")

        assert response.json()["rating"] == 0

    async def test_rating_of_missing_book_is_404(self, client):
        assert (await client.get(f"{PREFIX}/books/99999/rating")).status_code == 404

    async def test_rating_also_served_under_rating_prefix(self, client, make_book, make_review):
        book_id = (await make_book()).id
        await make_review(book_id=book_id, rating=2)

        response = await client.get(f"{PREFIX}/books/rating/{book_id}")

        assert response.status_code == 200
        assert response.json() == {"book_id": book_id, "rating": 2.0}
