# tests/test_api/conftest.py
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_hardcover
from api.main import app
from shelf.sa.database import get_db


@pytest.fixture
def client(db_session, mock_hardcover):
    """TestClient bound to the test session and the mocked Hardcover client"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hardcover] = lambda: mock_hardcover
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(sample_user):
    return {"Authorization": f"Bearer {sample_user.api_token}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {other_user.api_token}"}
