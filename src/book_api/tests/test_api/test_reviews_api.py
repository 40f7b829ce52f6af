PREFIX = "/api/v1"


class TestReviewsApi:

    async def test_create_review(self, client, make_book, make_reviewer):
        book_id = (await make_book()).id
        reviewer_id = (await make_reviewer()).id

        response = await client.post(
            f"{PREFIX}/reviews",
            json={"headline": "Dense", "text": "Worth a second read.", "rating": 4,
                  "book_id": book_id, "reviewer_id": reviewer_id},
        )

        assert response.status_code == 201
        assert response.json()["rating"] == 4

    async def test_rating_out_of_range_is_422(self, client, make_book, make_reviewer):
        book_id = (await make_book()).id
        reviewer_id = (await make_reviewer()).id

        response = await client.post(
            f"{PREFIX}/reviews",
            json={"headline": "h", "text": "t", "rating": 9, "book_id": book_id, "reviewer_id": reviewer_id},
        )

        assert response.status_code == 422
        assert response.json()["fields"] == ["rating"]

    async def test_book_of_review(self, client, make_review):
        review = await make_review()
        review_id, book_id = review.id, review.book_id

        response = await client.get(f"{PREFIX}/reviews/{review_id}/book")

        assert response.json()["id"] == book_id

    async def test_update_and_delete(self, client, make_review):
        review = await make_review(rating=2)
        review_id = review.id
        payload = {
            "id": review_id, "headline": review.headline, "text": review.text, "rating": 5,
            "book_id": review.book_id, "reviewer_id": review.reviewer_id,
        }

        updated = await client.put(f"{PREFIX}/reviews/{review_id}", json=payload)
        fetched = await client.get(f"{PREFIX}/reviews/{review_id}")
        deleted = await client.delete(f"{PREFIX}/reviews/{review_id}")

        assert updated.status_code == 204
        assert fetched.json()["rating"] == 5
        assert deleted.status_code == 204
        assert (await client.get(f"{PREFIX}/reviews/{review_id}")).status_code == 404


class TestReviewersApi:

    async def test_reviewer_lifecycle(self, client, make_review):
        review = await make_review()
        review_id, reviewer_id = review.id, review.reviewer_id

        owner = await client.get(f"{PREFIX}/reviewers/{review_id}/reviewer")
        reviews = await client.get(f"{PREFIX}/reviewers/{reviewer_id}/reviews")
        deleted = await client.delete(f"{PREFIX}/reviewers/{reviewer_id}")

        assert owner.json()["id"] == reviewer_id
        assert [r["id"] for r in reviews.json()] == [review_id]
        assert deleted.status_code == 204
        assert (await client.get(f"{PREFIX}/reviews/{review_id}")).status_code == 404

    async def test_blank_first_name_is_422(self, client):
        response = await client.post(f"{PREFIX}/reviewers", json={"first_name": "", "last_name": "Woolf"})

        assert response.status_code == 422
        assert response.json()["fields"] == ["first_name"]
