"""Tests for content review endpoints."""

from collections.abc import Callable

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from codepath import models


def _review_url(content_id: int) -> str:
    return f"/api/content/{content_id}/reviews"


class TestAddReview:
    """Test suite for POST /content/:id/reviews endpoint."""

    def test_average_is_mean_of_all_reviews(
        self,
        client: TestClient,
        published_content: models.Content,
        student_headers: dict[str, str],
        instructor_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        """Ratings 4 and 2 average to 3.0; a further 5 moves it to 11/3."""
        url = _review_url(published_content.id)

        first = client.post(url, json={"rating": 4, "comment": "Clear"}, headers=student_headers)
        second = client.post(url, json={"rating": 2}, headers=instructor_headers)

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["metadata"]["average_rating"] == 4.0
        assert second.json()["metadata"]["average_rating"] == 3.0

        third = client.post(url, json={"rating": 5}, headers=admin_headers)

        metadata = third.json()["metadata"]
        assert metadata["average_rating"] == pytest.approx(3.6667, abs=1e-4)
        assert [review["rating"] for review in metadata["reviews"]] == [4, 2, 5]

    def test_review_records_reviewer(
        self,
        client: TestClient,
        published_content: models.Content,
        test_student: models.User,
        student_headers: dict[str, str],
    ) -> None:
        response = client.post(
            _review_url(published_content.id),
            json={"rating": 5, "comment": "  Great intro  "},
            headers=student_headers,
        )

        review = response.json()["metadata"]["reviews"][0]
        assert review["user_id"] == test_student.id
        assert review["username"] == "student"
        assert review["comment"] == "Great intro"
        assert review["created_at"] is not None

    def test_repeat_reviews_from_same_user_all_count(
        self,
        client: TestClient,
        db_session: Session,
        published_content: models.Content,
        student_headers: dict[str, str],
    ) -> None:
        """Reviews are appended, never de-duplicated per user."""
        url = _review_url(published_content.id)
        client.post(url, json={"rating": 5}, headers=student_headers)
        response = client.post(url, json={"rating": 1}, headers=student_headers)

        metadata = response.json()["metadata"]
        assert len(metadata["reviews"]) == 2
        assert metadata["average_rating"] == 3.0
        assert db_session.query(models.ContentReview).count() == 2

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range_rating_is_rejected(
        self,
        client: TestClient,
        db_session: Session,
        published_content: models.Content,
        student_headers: dict[str, str],
        rating: int,
    ) -> None:
        """Ratings outside 1-5 are 400 and leave the content untouched."""
        response = client.post(
            _review_url(published_content.id), json={"rating": rating}, headers=student_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert db_session.query(models.ContentReview).count() == 0
        db_session.expire_all()
        assert db_session.get(models.Content, published_content.id).average_rating == 0.0

    def test_fractional_rating_is_rejected(
        self,
        client: TestClient,
        published_content: models.Content,
        student_headers: dict[str, str],
    ) -> None:
        response = client.post(
            _review_url(published_content.id), json={"rating": 3.5}, headers=student_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_review_unknown_content(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        response = client.post(_review_url(99999), json={"rating": 3}, headers=student_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_review_requires_authentication(
        self, client: TestClient, published_content: models.Content
    ) -> None:
        response = client.post(_review_url(published_content.id), json={"rating": 3})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_review_bumps_version_but_keeps_views(
        self,
        client: TestClient,
        db_session: Session,
        make_content: Callable[..., models.Content],
        student_headers: dict[str, str],
    ) -> None:
        """The average swap is versioned; the view counter is untouched."""
        content = make_content(view_count=7)

        client.post(_review_url(content.id), json={"rating": 3}, headers=student_headers)

        db_session.expire_all()
        stored = db_session.get(models.Content, content.id)
        assert stored.version == 2
        assert stored.view_count == 7
        assert stored.average_rating == 3.0
