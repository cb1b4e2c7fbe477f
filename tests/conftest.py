# tests/conftest.py
import os
import sys
import pytest
from datetime import date
from pathlib import Path
from unittest.mock import Mock
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from shelf.auth import AuthSession
from shelf.hardcover import HardcoverClient
from shelf.merge import ExternalBookMetadata, normalize_external_id
from shelf.sa.database import Database
from shelf.sa.models import Base, User
from shelf.sa.repositories import UserRepository

TODAY = date(2024, 3, 15)

BOOKS = {
    "101": ExternalBookMetadata(
        id="101",
        title="The Left Hand of Darkness",
        authors=["Ursula K. Le Guin"],
        cover_url="https://example.com/101.jpg",
        page_count=304,
        publication_year=1969
    ),
    "202": ExternalBookMetadata(
        id="202",
        title="Piranesi",
        authors=["Susanna Clarke"],
        cover_url="https://example.com/202.jpg",
        page_count=272,
        publication_year=2020
    ),
    "303": ExternalBookMetadata(
        id="303",
        title="Kindred",
        authors=["Octavia E. Butler"],
        page_count=264
    ),
}


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_readthat.db")


@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    db.engine.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass


@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Delete all data from tables in reverse order of dependencies
    db_session.execute(text("DELETE FROM social_feed"))
    db_session.execute(text("DELETE FROM follows"))
    db_session.execute(text("DELETE FROM reviews"))
    db_session.execute(text("DELETE FROM user_books"))
    db_session.execute(text("DELETE FROM users"))
    db_session.commit()
    yield
    db_session.rollback()


@pytest.fixture
def sample_user(db_session) -> User:
    """Create a sample user for testing."""
    return UserRepository(db_session).create_user(
        email="ada@example.com",
        username="ada",
        display_name="Ada Reader"
    )


@pytest.fixture
def other_user(db_session) -> User:
    return UserRepository(db_session).create_user(
        email="grace@example.com",
        username="grace",
        display_name="Grace Pages"
    )


@pytest.fixture
def third_user(db_session) -> User:
    return UserRepository(db_session).create_user(
        email="linus@example.com",
        username="linus"
    )


@pytest.fixture
def auth(sample_user) -> AuthSession:
    return AuthSession(user_id=sample_user.id, token=sample_user.api_token)


@pytest.fixture
def other_auth(other_user) -> AuthSession:
    return AuthSession(user_id=other_user.id, token=other_user.api_token)


def _lookup(book_id):
    return BOOKS.get(normalize_external_id(book_id))


def _metadata_map(ids):
    found = {}
    for book_id in ids:
        book = _lookup(book_id)
        if book:
            found[book.id] = book
    return found


@pytest.fixture
def mock_hardcover():
    """HardcoverClient stand-in answering from the BOOKS table"""
    client = Mock(spec=HardcoverClient)
    client.get_book_by_id.side_effect = _lookup
    client.get_metadata_map.side_effect = _metadata_map
    client.get_books_by_ids.side_effect = lambda ids: list(_metadata_map(ids).values())
    client.get_explore_books.return_value = {"trending": [BOOKS["101"], BOOKS["202"]]}
    client.get_popular_books.return_value = [BOOKS["303"]]
    client.search_books.return_value = []
    client.get_author_by_id.return_value = None
    client.get_books_by_author.return_value = []
    return client


@pytest.fixture
def today():
    return TODAY
