import logging
from datetime import date

import pytest

from database import DocumentStore, StoreUnavailableError, database_path


def test_insert_and_get(store):
    doc_id = store.insert("authors", {"first_name": "Ursula", "family_name": "Le Guin"})
    assert len(doc_id) == 32
    assert store.get("authors", doc_id) == {"id": doc_id, "first_name": "Ursula", "family_name": "Le Guin"}


def test_dates_are_stored_as_iso_strings(store):
    doc_id = store.insert("authors", {"first_name": "A", "date_of_birth": date(1920, 3, 3)})
    assert store.get("authors", doc_id)["date_of_birth"] == "1920-03-03"


def test_get_missing_returns_none(store):
    assert store.get("books", "0" * 32) is None


def test_find_with_filters(store):
    first = store.insert("books", {"title": "A", "author": "x"})
    store.insert("books", {"title": "B", "author": "y"})
    third = store.insert("books", {"title": "C", "author": "x"})
    assert [d["id"] for d in store.find("books", author="x")] == [first, third]
    assert len(store.find("books")) == 3


def test_update_merges_changes(store):
    doc_id = store.insert("books", {"title": "Old", "isbn": "1"})
    updated = store.update("books", doc_id, {"title": "New"})
    assert updated == {"id": doc_id, "title": "New", "isbn": "1"}
    assert store.update("books", "f" * 32, {"title": "x"}) is None


def test_delete_and_count(store):
    doc_id = store.insert("books", {"title": "A"})
    assert store.count("books") == 1
    assert store.delete("books", doc_id) is True
    assert store.delete("books", doc_id) is False
    assert store.count("books") == 0


def test_unknown_collection_rejected(store):
    with pytest.raises(KeyError):
        store.insert("genres", {"name": "Fantasy"})


def test_invalid_collection_name():
    with pytest.raises(ValueError):
        DocumentStore("sqlite:///:memory:", collections=["books; DROP TABLE books"])


def test_persistence_across_clients(tmp_path):
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    with DocumentStore(url) as first:
        doc_id = first.insert("authors", {"first_name": "Ursula"})
    with DocumentStore(url) as second:
        assert second.get("authors", doc_id)["first_name"] == "Ursula"


def test_connection_failure_is_logged_not_raised(caplog):
    store = DocumentStore("mongodb://localhost/local_library")
    with caplog.at_level(logging.ERROR, logger="database"):
        assert store.connect() is False
    assert not store.connected
    assert "connection error" in caplog.text


def test_disconnected_store_raises_unavailable():
    store = DocumentStore("sqlite:///:memory:")
    with pytest.raises(StoreUnavailableError):
        store.find("authors")
    assert StoreUnavailableError.status_code == 503


def test_connect_is_idempotent(store):
    assert store.connect() is True


def test_database_path():
    assert database_path("sqlite:///library.db") == "library.db"
    assert database_path("sqlite:////var/data/library.db") == "/var/data/library.db"
    with pytest.raises(ValueError):
        database_path("sqlite:///")
