# tests/test_repositories/test_review_repository.py

import pytest
from datetime import datetime, timedelta, UTC
from shelf.sa.models import Review
from shelf.sa.repositories import ReviewRepository


@pytest.fixture
def review_repo(db_session):
    return ReviewRepository(db_session)


def test_upsert_review_creates(review_repo, sample_user):
    review = review_repo.upsert_review(sample_user.id, "101", 8.5, review_text="Loved it")
    assert review.id is not None
    assert review.rating == 8.5
    assert review.is_spoiler is False


def test_upsert_review_replaces_existing(review_repo, db_session, sample_user):
    """A reader has one review per book; resubmitting replaces it."""
    first = review_repo.upsert_review(sample_user.id, "101", 6.0, review_text="Fine")
    second = review_repo.upsert_review(sample_user.id, "101", 9.0, is_spoiler=True)

    assert second.id == first.id
    assert db_session.query(Review).count() == 1
    assert second.rating == 9.0
    assert second.review_text is None
    assert second.is_spoiler is True


def test_get_book_reviews_newest_first(review_repo, db_session, sample_user, other_user):
    now = datetime.now(UTC)
    db_session.add_all([
        Review(user_id=sample_user.id, hardcover_id="101", rating=7.0, created_at=now - timedelta(hours=1)),
        Review(user_id=other_user.id, hardcover_id="101", rating=9.0, created_at=now),
        Review(user_id=other_user.id, hardcover_id="202", rating=2.0, created_at=now),
    ])
    db_session.commit()

    reviews = review_repo.get_book_reviews("101")
    assert [r.user.username for r in reviews] == ["grace", "ada"]
    assert len(review_repo.get_book_reviews("101", limit=1)) == 1
    assert sorted(review_repo.get_book_ratings("101")) == [7.0, 9.0]
    assert review_repo.get_book_ratings("999") == []


def test_get_user_reviews(review_repo, sample_user, other_user):
    review_repo.upsert_review(sample_user.id, "101", 7.0)
    review_repo.upsert_review(sample_user.id, "202", 8.0)
    review_repo.upsert_review(other_user.id, "101", 3.0)
    assert {r.hardcover_id for r in review_repo.get_user_reviews(sample_user.id)} == {"101", "202"}


def test_delete_review(review_repo, sample_user):
    review_repo.upsert_review(sample_user.id, "101", 7.0)
    assert review_repo.delete_review(sample_user.id, "101") is True
    assert review_repo.get_user_review(sample_user.id, "101") is None
    assert review_repo.delete_review(sample_user.id, "101") is False
