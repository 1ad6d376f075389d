from fastapi import APIRouter, Depends, HTTPException, Request

from library import Catalog
from templating import render

router = APIRouter()


def get_catalog(request: Request) -> Catalog:
    """Catalog bound to the application's document store."""
    return Catalog(request.app.state.store)


@router.get("/authors")
def author_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    return render(request, "author_list", {"title": "Author List", "author_list": catalog.list_authors()})


@router.get("/author/{author_id}")
def author_detail(author_id: str, request: Request, catalog: Catalog = Depends(get_catalog)):
    author = catalog.get_author(author_id)
    if author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    return render(request, "author_detail", {
        "title": "Author Detail",
        "author": author,
        "author_books": catalog.books_by_author(author_id),
    })


@router.get("/books")
def book_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    books = [catalog.populate_book(book) for book in catalog.list_books()]
    return render(request, "book_list", {"title": "Book List", "book_list": books})


@router.get("/book/{book_id}")
def book_detail(book_id: str, request: Request, catalog: Catalog = Depends(get_catalog)):
    book = catalog.get_book(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return render(request, "book_detail", {"title": book.title, "book": catalog.populate_book(book)})
