import pytest

from app import create_app
from core.managers.storage_manager import get_storage


@pytest.fixture(scope="session")
def test_app():
    """Application configured for testing, backed by the in-memory store."""
    return create_app("testing")


@pytest.fixture(scope="module")
def test_client(test_app):
    # No app context stays pushed between tests; each request pushes its own
    return test_app.test_client()


@pytest.fixture(autouse=True)
def clean_storage(test_app):
    storage = get_storage(test_app)
    storage.truncate()
    yield storage
    storage.truncate()


@pytest.fixture
def storage(clean_storage):
    return clean_storage
