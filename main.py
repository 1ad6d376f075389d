import subprocess
import sys
from typing import List, Optional

import typer
from rich.console import Console

from config import Settings
from database import DocumentStore
from library import Catalog
from schemas import ValidationError
from utils.ui_helpers import (
    print_author_list,
    print_book_list,
    print_validation_error,
    set_output_mode,
)

APP_NAME = "Local Library CLI"

console = Console()

app = typer.Typer(help=APP_NAME)


def open_catalog() -> Catalog:
    """Connect to the configured document store, exiting with status 1 on failure."""
    store = DocumentStore(Settings().database_url)
    if not store.connect():
        console.print("[bold red]Could not connect to the document store.[/]")
        raise typer.Exit(code=1)
    return Catalog(store)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("add-author")
def cli_add_author(
    first_name: Optional[str] = typer.Option(None, "--first-name", "-f", help="Given name"),
    family_name: Optional[str] = typer.Option(None, "--family-name", "-l", help="Family name"),
    born: Optional[str] = typer.Option(None, "--born", help="Date of birth (YYYY-MM-DD)"),
    died: Optional[str] = typer.Option(None, "--died", help="Date of death (YYYY-MM-DD)"),
):
    """Add an author."""
    catalog = open_catalog()
    try:
        author = catalog.add_author({
            "first_name": first_name,
            "family_name": family_name,
            "date_of_birth": born,
            "date_of_death": died,
        })
    except ValidationError as e:
        print_validation_error(e)
        raise typer.Exit(code=1)
    finally:
        catalog.store.close()
    print(f"Added author: {author.name} ({author.id})")


@app.command("add-book")
def cli_add_book(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Book title"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author identifier"),
    summary: Optional[str] = typer.Option(None, "--summary", "-s", help="Short summary"),
    isbn: Optional[str] = typer.Option(None, "--isbn", help="ISBN"),
    genre: List[str] = typer.Option([], "--genre", "-g", help="Genre identifier (repeatable)"),
):
    """Add a book."""
    catalog = open_catalog()
    try:
        book = catalog.add_book({
            "title": title,
            "author": author,
            "summary": summary,
            "isbn": isbn,
            "genre": list(genre or []),
        })
    except ValidationError as e:
        print_validation_error(e)
        raise typer.Exit(code=1)
    finally:
        catalog.store.close()
    print(f"Added book: {book.title} ({book.id})")


@app.command("list-authors")
def cli_list_authors():
    """List all authors."""
    catalog = open_catalog()
    try:
        print_author_list(catalog.list_authors())
    finally:
        catalog.store.close()


@app.command("list-books")
def cli_list_books():
    """List all books with their authors."""
    catalog = open_catalog()
    try:
        print_book_list([catalog.populate_book(book) for book in catalog.list_books()])
    finally:
        catalog.store.close()


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
):
    """Start the web application with uvicorn."""
    settings = Settings()
    host = host or settings.api_host
    port = port or settings.api_port
    print(f"Starting web UI on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    subprocess.run(args)


if __name__ == "__main__":
    app()
