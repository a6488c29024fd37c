"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from catalog.models import BookCreate
from catalog.store import InMemoryBookStore, SQLiteBookStore


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryBookStore()


@pytest.fixture
def sqlite_store():
    """Create an empty SQLite store backed by an in-memory database."""
    store = SQLiteBookStore("sqlite://")
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Run the test once against each store backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    """Create a test client serving the given store."""
    return TestClient(create_app(store=store))


@pytest.fixture
def sample_book_payload():
    """Sample create payload for testing."""
    return {
        "title": "Clean Code",
        "author": "Robert Martin",
        "year": 2008,
        "isbn": "978-0132350884",
    }


@pytest.fixture
def sample_book(sample_book_payload):
    """Sample create model for testing."""
    return BookCreate(**sample_book_payload)


@pytest.fixture
def make_book():
    """Factory building a valid create payload numbered ``index``."""
    def _make_book(index: int, **overrides) -> BookCreate:
        fields = {
            "title": f"Book {index}",
            "author": "Author Name",
            "year": 2020,
            "isbn": "9781593278281",
        }
        fields.update(overrides)
        return BookCreate(**fields)
    return _make_book
