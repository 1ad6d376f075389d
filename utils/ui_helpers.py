import json
import os
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _print_rows(title: str, empty_message: str, columns: List[str], rows: List[Dict[str, Any]]) -> None:
    """Print ``rows`` according to the current output mode.
    - plain: one ' | '-joined line per row, or ``empty_message``
    - json: JSON array of row objects
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(rows, ensure_ascii=False))
        return

    if not rows:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        for column in columns:
            table.add_column(column.replace("_", " ").title(), style="white")
        for row in rows:
            table.add_row(*(str(row.get(column, "")) for column in columns))
        _console.print(table)
    else:
        for row in rows:
            print(" | ".join(str(row.get(column, "")) for column in columns))


def print_author_list(authors: List[Any]) -> None:
    rows = [{"id": a.id, "name": a.name, "lifespan": a.lifespan, "url": a.url} for a in authors]
    _print_rows("Authors", "No authors in catalog.", ["id", "name", "lifespan"], rows)


def print_book_list(books: List[Any]) -> None:
    rows = [
        {"id": b.id, "title": b.title, "author": b.author.name if b.author else "Unknown", "isbn": b.isbn, "url": b.url}
        for b in books
    ]
    _print_rows("Books", "No books in catalog.", ["id", "title", "author", "isbn"], rows)


def print_validation_error(error) -> None:
    """Print every offending field of a ValidationError."""
    if get_output_mode() == "json":
        print(json.dumps({"error": error.schema_name + " validation failed", "fields": error.errors}, ensure_ascii=False))
        return
    print(f"Invalid {error.schema_name.lower()}:")
    for name, message in error.errors.items():
        print(f"  {name}: {message}")
