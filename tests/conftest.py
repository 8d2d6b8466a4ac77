import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from bookstore_api.app.main import create_app

BASE = "/api/bookstore"


class UnreachableCollection:
    """Collection whose every call fails as if the server were down."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    find = find_one = insert_one = replace_one = find_one_and_delete = _fail


@pytest.fixture
def database():
    return mongomock.MongoClient()["Book"]


@pytest.fixture
def collection(database):
    return database["bookstores"]


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def dune(client):
    """Add the Dune record and return its identifier."""
    response = client.post(f"{BASE}/add", json={"Author": "Frank Herbert", "Title": "Dune", "Pages": 412})
    assert response.status_code == 200
    return client.get(f"{BASE}/").json()[0]["_id"]


@pytest.fixture
def unreachable_client(app):
    """Client whose bookstore routes talk to a store that cannot be reached."""
    from bookstore_api.app.api.endpoints.bookstore import get_bookstore_service
    from bookstore_api.app.services.bookstore_service import BookstoreService

    app.dependency_overrides[get_bookstore_service] = lambda: BookstoreService(UnreachableCollection())
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
