"""Shared fixtures: a fresh backing file per test."""
import pytest
from httpx import ASGITransport, AsyncClient

from bookshelf.dependencies import get_book_store
from bookshelf.main import app
from bookshelf.storage import BookStore


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "books.json"


@pytest.fixture
def store(data_file):
    return BookStore(data_file)


@pytest.fixture
async def client(store):
    """Create test client bound to the temporary store."""
    app.dependency_overrides[get_book_store] = lambda: store
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
