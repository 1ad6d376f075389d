from __future__ import annotations

from typing import TYPE_CHECKING

import virtuals
from schemas import BOOK_SCHEMA

if TYPE_CHECKING:
    from author import Author


class Book:
    """A single book in the catalog.

    ``author`` holds the Author identifier as stored. After
    ``Catalog.populate_book`` it holds the Author record instead (or None
    when the reference no longer resolves).
    """

    schema = BOOK_SCHEMA

    def __init__(self, title: str, author: "str | Author | None", summary: str, isbn: str,
                 genre: list | None = None, id: str | None = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.summary = summary
        self.isbn = isbn
        self.genre = list(genre or [])

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} (ISBN: {self.isbn})"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r})"

    @property
    def url(self) -> str:
        return virtuals.entity_url(self)

    @property
    def author_id(self) -> str | None:
        if self.author is None or isinstance(self.author, str):
            return self.author
        return self.author.id

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author_id,
            "summary": self.summary,
            "isbn": self.isbn,
            "genre": list(self.genre),
        }

    @staticmethod
    def from_dict(data: dict, id: str | None = None) -> "Book":
        return Book(
            title=data["title"],
            author=data["author"],
            summary=data["summary"],
            isbn=data["isbn"],
            genre=data.get("genre"),
            id=id or data.get("id"),
        )
