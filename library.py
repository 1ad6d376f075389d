import copy
import logging
from typing import Any, Dict, List, Optional

from author import Author
from book import Book
from database import DocumentStore
from schemas import AUTHOR_SCHEMA, BOOK_SCHEMA, Schema, validate_record

logger = logging.getLogger(__name__)


class Catalog:
    """Manages authors and books on top of a document store."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    # ------------------------- Authors ------------------------- #
    def add_author(self, data: Dict[str, Any]) -> Author:
        """Validate and persist a new author. Raises ValidationError."""
        record = self._prepare(AUTHOR_SCHEMA, data)
        author = Author.from_dict(record)
        author.id = self.store.insert(AUTHOR_SCHEMA.collection, author.to_dict())
        logger.info(f"Author added: {author.id} ({author.name})")
        return author

    def get_author(self, author_id: str) -> Optional[Author]:
        doc = self.store.get(AUTHOR_SCHEMA.collection, author_id)
        return Author.from_dict(doc) if doc else None

    def list_authors(self) -> List[Author]:
        authors = [Author.from_dict(doc) for doc in self.store.find(AUTHOR_SCHEMA.collection)]
        return sorted(authors, key=lambda a: (a.family_name, a.first_name))

    def update_author(self, author_id: str, **changes: Any) -> Optional[Author]:
        """Merge ``changes`` into an author and re-validate. Returns None if not found."""
        author = self.get_author(author_id)
        if not author:
            return None
        merged = author.to_dict()
        merged.update(changes)
        record = self._prepare(AUTHOR_SCHEMA, merged)
        doc = self.store.update(AUTHOR_SCHEMA.collection, author_id, Author.from_dict(record).to_dict())
        return Author.from_dict(doc) if doc else None

    def remove_author(self, author_id: str) -> bool:
        # Books keep their reference; it simply stops resolving.
        return self.store.delete(AUTHOR_SCHEMA.collection, author_id)

    # ------------------------- Books ------------------------- #
    def add_book(self, data: Dict[str, Any]) -> Book:
        """Validate and persist a new book. Raises ValidationError."""
        record = self._prepare(BOOK_SCHEMA, data)
        book = Book.from_dict(record)
        book.id = self.store.insert(BOOK_SCHEMA.collection, book.to_dict())
        logger.info(f"Book added: {book.id} ({book.title})")
        return book

    def get_book(self, book_id: str) -> Optional[Book]:
        doc = self.store.get(BOOK_SCHEMA.collection, book_id)
        return Book.from_dict(doc) if doc else None

    def list_books(self) -> List[Book]:
        books = [Book.from_dict(doc) for doc in self.store.find(BOOK_SCHEMA.collection)]
        return sorted(books, key=lambda b: b.title)

    def books_by_author(self, author_id: str) -> List[Book]:
        docs = self.store.find(BOOK_SCHEMA.collection, author=author_id)
        return sorted((Book.from_dict(doc) for doc in docs), key=lambda b: b.title)

    def update_book(self, book_id: str, **changes: Any) -> Optional[Book]:
        book = self.get_book(book_id)
        if not book:
            return None
        merged = book.to_dict()
        merged.update(changes)
        record = self._prepare(BOOK_SCHEMA, merged)
        doc = self.store.update(BOOK_SCHEMA.collection, book_id, Book.from_dict(record).to_dict())
        return Book.from_dict(doc) if doc else None

    def remove_book(self, book_id: str) -> bool:
        return self.store.delete(BOOK_SCHEMA.collection, book_id)

    def populate_book(self, book: Book) -> Book:
        """Return a copy of ``book`` with its author reference expanded.

        A dangling reference expands to None.
        """
        populated = copy.copy(book)
        populated.genre = list(book.genre)
        author_id = book.author_id
        populated.author = self.get_author(author_id) if author_id else None
        if author_id and populated.author is None:
            logger.warning(f"Book {book.id} references missing author {author_id}")
        return populated

    # ------------------------- Helpers ------------------------- #
    @staticmethod
    def _prepare(schema: Schema, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keep declared fields only, then validate."""
        record = {name: data.get(name) for name in schema.field_names if name in data}
        return dict(validate_record(schema, record))
