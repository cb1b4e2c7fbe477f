# tests/test_services/test_review_service.py

import pytest
from datetime import date
from shelf.exceptions import AuthenticationError, ValidationError
from shelf.sa.models import ActivityEvent, Review, UserBook
from shelf.services import LibraryService, ReviewService

TODAY = date(2024, 3, 15)


@pytest.fixture
def library_service(db_session, mock_hardcover):
    return LibraryService(db_session, mock_hardcover, today=lambda: TODAY)


@pytest.fixture
def service(db_session, mock_hardcover, library_service):
    return ReviewService(db_session, mock_hardcover, library_service)


def test_submit_review_adds_book_as_finished(service, db_session, auth):
    """Reviewing an unshelved book adds it as finished with today's dates."""
    review = service.submit_review(auth, "101", 8.5, review_text="  Remarkable  ")

    assert review.rating == 8.5
    assert review.review_text == "Remarkable"
    record = db_session.query(UserBook).one()
    assert record.status == "finished"
    assert record.start_date == TODAY
    assert record.finish_date == TODAY
    assert record.rating == 8.5

    types = [e.activity_type for e in db_session.query(ActivityEvent).order_by(ActivityEvent.id)]
    assert types == ["added_to_library", "review_posted"]
    posted = db_session.query(ActivityEvent).filter_by(activity_type="review_posted").one()
    assert posted.event_metadata == {"rating": 8.5, "has_text": True}
    assert posted.book_title == "The Left Hand of Darkness"


def test_submit_review_moves_reading_book_to_finished(service, library_service, auth):
    record = library_service.add_to_shelf(auth, "101", "reading")
    library_service.library.update(record, start_date=date(2024, 2, 1))

    service.submit_review(auth, "101", 7)

    record = library_service.get_shelf_entry(auth, "101")
    assert record.status == "finished"
    assert record.start_date == date(2024, 2, 1)
    assert record.finish_date == TODAY


def test_submit_review_keeps_finished_record_dates(service, library_service, db_session, auth):
    record = library_service.add_to_shelf(auth, "101", "finished")
    library_service.library.update(record, start_date=date(2023, 5, 1), finish_date=date(2023, 6, 1))

    service.submit_review(auth, "101", 6.0)

    record = library_service.get_shelf_entry(auth, "101")
    assert record.finish_date == date(2023, 6, 1)
    posted = db_session.query(ActivityEvent).filter_by(activity_type="review_posted").one()
    assert posted.event_metadata == {"rating": 6.0, "has_text": False}


def test_resubmitting_replaces_review(service, db_session, auth):
    service.submit_review(auth, "101", 5.0, review_text="Meh")
    service.submit_review(auth, "101", 9.0, review_text="Grew on me")

    review = db_session.query(Review).one()
    assert review.rating == 9.0
    assert review.review_text == "Grew on me"


@pytest.mark.parametrize("rating", [11, -1, None, "great"])
def test_invalid_rating_writes_nothing(service, db_session, auth, rating):
    with pytest.raises(ValidationError):
        service.submit_review(auth, "101", rating)
    assert db_session.query(UserBook).count() == 0
    assert db_session.query(Review).count() == 0


def test_submit_review_requires_auth(service):
    with pytest.raises(AuthenticationError):
        service.submit_review(None, "101", 8)


def test_review_stats(service, auth, other_auth):
    """Two reviews of 8.5 and 9.5 average to 9.0."""
    service.submit_review(auth, "101", 8.5)
    service.submit_review(other_auth, "101", 9.5)

    stats = service.get_review_stats("101")
    assert stats.average_rating == 9.0
    assert stats.total_reviews == 2
    assert tuple(service.get_review_stats("202")) == (0, 0)
    assert tuple(service.get_review_stats("nope")) == (0, 0)


def test_fetch_reviews(service, auth, other_auth):
    service.submit_review(auth, "101", 8.5)
    service.submit_review(other_auth, "101", 9.5)
    assert {r.user.username for r in service.fetch_reviews("101")} == {"ada", "grace"}
    assert service.fetch_reviews("bad id") == []


def test_get_user_reviews_attaches_books(service, auth):
    service.submit_review(auth, "101", 8.0)
    service.submit_review(auth, "999", 4.0)

    reviewed = {r.review.hardcover_id: r for r in service.get_user_reviews(auth.user_id)}
    assert reviewed["101"].book.title == "The Left Hand of Darkness"
    assert reviewed["999"].book is None
    assert service.get_user_reviews(12345) == []


def test_review_of_private_record_posts_no_activity(service, library_service, db_session, auth):
    record = library_service.add_to_shelf(auth, "101", "reading")
    library_service.set_privacy(auth, record.id, True)

    review = service.submit_review(auth, "101", 8.0, review_text="Quietly loved it")

    assert review.rating == 8.0
    assert library_service.get_shelf_entry(auth, "101").status == "finished"
    types = [e.activity_type for e in db_session.query(ActivityEvent).order_by(ActivityEvent.id)]
    assert types == ["added_to_library"]
