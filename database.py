"""SQLite-backed JSON document store.

Each collection is a table holding one JSON document per row, keyed by a
generated identifier. A ``DocumentStore`` is constructed once per process
and handed to whatever needs persistence.
"""

import json
import logging
import re
import sqlite3
import threading
import uuid
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

SQLITE_PREFIX = "sqlite:///"
_COLLECTION_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class StoreUnavailableError(RuntimeError):
    """The document store is not connected."""

    status_code = 503


def _json_default(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def new_id() -> str:
    return uuid.uuid4().hex


def database_path(uri: str) -> str:
    """Return the SQLite path named by ``uri``. Raises ValueError for other schemes."""
    if not uri or not uri.startswith(SQLITE_PREFIX):
        raise ValueError(f"Unsupported document store URI: {uri!r}")
    path = uri[len(SQLITE_PREFIX):]
    if not path:
        raise ValueError(f"Document store URI has no database path: {uri!r}")
    return path


class DocumentStore:
    """Client for the catalog's document collections."""

    def __init__(self, uri: str, collections: Iterable[str] = ("authors", "books")) -> None:
        self.uri = uri
        self.collections = tuple(collections)
        for name in self.collections:
            self._check_collection_name(name)
        self._conn: Optional[sqlite3.Connection] = None
        # The server's worker threads share one connection.
        self._lock = threading.RLock()

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> bool:
        """Open the backend and create collection tables.

        Failures are logged and leave the store disconnected.
        """
        if self._conn is not None:
            return True
        try:
            conn = sqlite3.connect(database_path(self.uri), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            for name in self.collections:
                conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS {name} (
                        id TEXT PRIMARY KEY,
                        document TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)
            conn.commit()
        except (sqlite3.Error, ValueError) as e:
            logger.error(f"Document store connection error: {e}")
            return False
        self._conn = conn
        logger.info(f"Connected to document store at {self.uri}")
        return True

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self) -> "DocumentStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------- Core operations ------------------------- #
    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        doc_id = new_id()
        payload = self._dump(document)
        with self._lock:
            conn = self._connection(collection)
            conn.execute(f"INSERT INTO {collection} (id, document) VALUES (?, ?)", (doc_id, payload))
            conn.commit()
        return doc_id

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            conn = self._connection(collection)
            row = conn.execute(f"SELECT id, document FROM {collection} WHERE id = ?", (doc_id,)).fetchone()
        return self._load(row) if row else None

    def find(self, collection: str, **equals: Any) -> List[Dict[str, Any]]:
        """Return documents whose fields equal every given value, in insertion order."""
        with self._lock:
            conn = self._connection(collection)
            rows = conn.execute(f"SELECT id, document FROM {collection} ORDER BY rowid").fetchall()
        documents = [self._load(row) for row in rows]
        if not equals:
            return documents
        return [doc for doc in documents if all(doc.get(k) == v for k, v in equals.items())]

    def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            current = self.get(collection, doc_id)
            if current is None:
                return None
            current.pop("id", None)
            current.update(changes)
            conn = self._connection(collection)
            conn.execute(f"UPDATE {collection} SET document = ? WHERE id = ?", (self._dump(current), doc_id))
            conn.commit()
        return self.get(collection, doc_id)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            conn = self._connection(collection)
            cursor = conn.execute(f"DELETE FROM {collection} WHERE id = ?", (doc_id,))
            conn.commit()
            return cursor.rowcount > 0

    def count(self, collection: str) -> int:
        with self._lock:
            conn = self._connection(collection)
            return conn.execute(f"SELECT COUNT(*) FROM {collection}").fetchone()[0]

    # ------------------------- Helpers ------------------------- #
    def _connection(self, collection: str) -> sqlite3.Connection:
        if collection not in self.collections:
            raise KeyError(f"Unknown collection: {collection}")
        if self._conn is None:
            raise StoreUnavailableError("Document store is not connected.")
        return self._conn

    @staticmethod
    def _check_collection_name(name: str) -> None:
        if not _COLLECTION_RE.match(name):
            raise ValueError(f"Invalid collection name: {name!r}")

    @staticmethod
    def _dump(document: Dict[str, Any]) -> str:
        doc = {k: v for k, v in document.items() if k != "id"}
        return json.dumps(doc, default=_json_default, ensure_ascii=False)

    @staticmethod
    def _load(row: sqlite3.Row) -> Dict[str, Any]:
        doc = json.loads(row["document"])
        doc["id"] = row["id"]
        return doc
