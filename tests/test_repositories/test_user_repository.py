# tests/test_repositories/test_user_repository.py

import pytest
from datetime import date
from shelf.sa.models import Review, UserBook
from shelf.sa.repositories import UserRepository


@pytest.fixture
def user_repo(db_session):
    """Fixture to create a UserRepository instance."""
    return UserRepository(db_session)


def test_create_user(user_repo):
    """Test creating a new user issues an API token."""
    user = user_repo.create_user(email="new@example.com", username="newbie", display_name="New Reader")
    assert user.id is not None
    assert user.username == "newbie"
    assert user.api_token
    assert user.name == "New Reader"


def test_create_duplicate_email(user_repo, sample_user):
    """Test that a duplicate email raises an error."""
    with pytest.raises(ValueError, match="already exists"):
        user_repo.create_user(email="ada@example.com")


def test_create_duplicate_username(user_repo, sample_user):
    with pytest.raises(ValueError, match="already exists"):
        user_repo.create_user(email="other@example.com", username="ada")


def test_name_falls_back_to_username_then_email(user_repo):
    user = user_repo.create_user(email="anon@example.com")
    assert user.name == "anon@example.com"
    user_repo.update_profile(user.id, username="anon")
    assert user.name == "anon"


def test_get_by_token(user_repo, sample_user):
    assert user_repo.get_by_token(sample_user.api_token).id == sample_user.id
    assert user_repo.get_by_token("wrong") is None
    assert user_repo.get_by_token("") is None
    assert user_repo.get_by_token(None) is None


def test_rotate_token(user_repo, sample_user):
    """Test that rotating a token invalidates the old one."""
    old_token = sample_user.api_token
    new_token = user_repo.rotate_token(sample_user.id)
    assert new_token != old_token
    assert user_repo.get_by_token(old_token) is None
    assert user_repo.get_by_token(new_token).id == sample_user.id
    assert user_repo.rotate_token(99999) is None


def test_update_profile_rejects_taken_username(user_repo, sample_user, other_user):
    with pytest.raises(ValueError, match="already taken"):
        user_repo.update_profile(other_user.id, username="ada")


def test_update_profile_missing_user(user_repo):
    assert user_repo.update_profile(99999, bio="hello") is None


def test_get_by_username_and_ids(user_repo, sample_user, other_user):
    assert user_repo.get_by_username("grace").id == other_user.id
    assert user_repo.get_by_username("nobody") is None
    assert {u.id for u in user_repo.get_by_ids([sample_user.id, other_user.id])} == {sample_user.id, other_user.id}
    assert user_repo.get_by_ids([]) == []


def test_list_and_count_users(user_repo, sample_user, other_user, third_user):
    assert user_repo.count_users() == 3
    assert [u.username for u in user_repo.list_users(limit=2)] == ["ada", "grace"]


def test_search_users(user_repo, sample_user, other_user, third_user):
    """Test searching by username or display name, case-insensitively."""
    assert [u.username for u in user_repo.search_users("PAGES")] == ["grace"]
    assert [u.username for u in user_repo.search_users("li")] == ["linus"]
    assert user_repo.search_users("") == []
    assert user_repo.search_users("   ") == []


def test_get_profile_counts(user_repo, db_session, sample_user):
    db_session.add_all([
        UserBook(user_id=sample_user.id, hardcover_id="1", status="finished", finish_date=date(2024, 1, 1)),
        UserBook(user_id=sample_user.id, hardcover_id="2", status="finished"),
        UserBook(user_id=sample_user.id, hardcover_id="3", status="want_to_read"),
        UserBook(user_id=sample_user.id, hardcover_id="4", status="reading"),
        Review(user_id=sample_user.id, hardcover_id="1", rating=8.0),
    ])
    db_session.commit()

    assert user_repo.get_profile_counts(sample_user.id) == {
        "review_count": 1,
        "books_read_count": 2,
        "want_to_read_count": 1,
    }


def test_get_profile_counts_excluding_private(user_repo, db_session, sample_user):
    db_session.add_all([
        UserBook(user_id=sample_user.id, hardcover_id="1", status="finished", is_private=True),
        UserBook(user_id=sample_user.id, hardcover_id="2", status="finished"),
        UserBook(user_id=sample_user.id, hardcover_id="3", status="want_to_read", is_private=True),
    ])
    db_session.commit()

    counts = user_repo.get_profile_counts(sample_user.id, include_private=False)
    assert counts["books_read_count"] == 1
    assert counts["want_to_read_count"] == 0
    assert user_repo.get_profile_counts(sample_user.id)["books_read_count"] == 2
