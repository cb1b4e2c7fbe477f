# tests/test_repositories/test_library_repository.py

import pytest
from datetime import date, datetime, timedelta, UTC
from shelf.sa.models import UserBook
from shelf.sa.repositories import LibraryRepository


@pytest.fixture
def library_repo(db_session):
    return LibraryRepository(db_session)


def test_upsert_creates_record(library_repo, sample_user):
    record = library_repo.upsert(sample_user.id, "101", status="reading", start_date=date(2024, 3, 1))
    assert record.id is not None
    assert record.status == "reading"
    assert record.start_date == date(2024, 3, 1)
    assert record.is_favorite is False
    assert record.is_private is False


def test_upsert_never_duplicates(library_repo, db_session, sample_user):
    """Adding a book twice updates the one existing record."""
    first = library_repo.upsert(sample_user.id, "101", status="want_to_read")
    second = library_repo.upsert(sample_user.id, "101", status="reading")

    assert second.id == first.id
    assert db_session.query(UserBook).filter_by(user_id=sample_user.id, hardcover_id="101").count() == 1
    assert library_repo.get_entry(sample_user.id, "101").status == "reading"


def test_same_book_for_different_users(library_repo, sample_user, other_user):
    library_repo.upsert(sample_user.id, "101", status="reading")
    library_repo.upsert(other_user.id, "101", status="finished")
    assert library_repo.get_entry(sample_user.id, "101").status == "reading"
    assert library_repo.get_entry(other_user.id, "101").status == "finished"


def test_upsert_rejects_unknown_fields(library_repo, db_session, sample_user):
    with pytest.raises(ValueError, match="owner"):
        library_repo.upsert(sample_user.id, "101", status="reading", owner=5)
    assert db_session.query(UserBook).count() == 0


def test_update_cannot_change_identity(library_repo, sample_user, other_user):
    """user_id and hardcover_id are fixed once a record exists."""
    record = library_repo.upsert(sample_user.id, "101", status="reading")

    with pytest.raises(ValueError, match="user_id"):
        library_repo.update(record, user_id=other_user.id)
    with pytest.raises(ValueError, match="hardcover_id"):
        library_repo.update(record, hardcover_id="202")

    assert library_repo.get_entry(sample_user.id, "101").id == record.id
    assert library_repo.get_entry(sample_user.id, "202") is None


def test_update(library_repo, sample_user):
    record = library_repo.upsert(sample_user.id, "101", status="reading")
    updated = library_repo.update(record, current_page=42, notes="Great so far")
    assert updated.current_page == 42
    assert library_repo.get_by_id(record.id).notes == "Great so far"


def test_get_user_books_orders_and_filters(library_repo, db_session, sample_user):
    now = datetime.now(UTC)
    db_session.add_all([
        UserBook(user_id=sample_user.id, hardcover_id="1", status="reading", updated_at=now - timedelta(days=3)),
        UserBook(user_id=sample_user.id, hardcover_id="2", status="finished", updated_at=now, is_private=True),
        UserBook(user_id=sample_user.id, hardcover_id="3", status="finished", updated_at=now - timedelta(days=1)),
    ])
    db_session.commit()

    assert [r.hardcover_id for r in library_repo.get_user_books(sample_user.id)] == ["2", "3", "1"]
    assert [r.hardcover_id for r in library_repo.get_user_books(sample_user.id, include_private=False)] == ["3", "1"]
    assert [r.hardcover_id for r in library_repo.get_user_books(sample_user.id, statuses=["finished"])] == ["2", "3"]
    assert [r.hardcover_id for r in library_repo.get_user_books(sample_user.id, limit=1, offset=1)] == ["3"]
    assert library_repo.count_user_books(sample_user.id) == 3
    assert library_repo.count_user_books(sample_user.id, status="reading") == 1


def test_get_user_books_invalid_order(library_repo, sample_user):
    with pytest.raises(ValueError, match="Invalid order field"):
        library_repo.get_user_books(sample_user.id, order_by="title")


def test_delete_entry(library_repo, sample_user):
    library_repo.upsert(sample_user.id, "101", status="reading")
    assert library_repo.delete_entry(sample_user.id, "101") is True
    assert library_repo.get_entry(sample_user.id, "101") is None
    assert library_repo.delete_entry(sample_user.id, "101") is False
