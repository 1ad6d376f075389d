import pytest
from fastapi.testclient import TestClient

from api import create_app
from config import Settings
from database import DocumentStore
from library import Catalog


@pytest.fixture
def store():
    # Fresh in-memory store for every test
    store = DocumentStore("sqlite:///:memory:")
    assert store.connect()
    yield store
    store.close()


@pytest.fixture
def catalog(store):
    return Catalog(store)


@pytest.fixture
def dev_settings():
    return Settings(environment="development")


@pytest.fixture
def client(store, dev_settings):
    app = create_app(settings=dev_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    # Point Settings() at a per-test database file
    url = f"sqlite:///{tmp_path / 'library_test.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url
