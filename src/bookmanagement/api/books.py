"""
HTTP routes for books.

Each route parses the request, calls exactly one `BookService` operation and
returns its result. Domain errors are turned into responses by the handlers in
`api.errors`.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from bookmanagement.core.config import settings
from bookmanagement.schemas.book import BookFilters, BookPage, BookRequest, BookResponse, PageRequest
from bookmanagement.schemas.common import ErrorResponse, ValidationErrorResponse
from bookmanagement.services.book_service import BookService
from .dependencies import get_book_service

router = APIRouter(prefix="/api/v1/books", tags=["Book Management"])

NOT_FOUND = {"model": ErrorResponse, "description": "Book not found with the specified ID"}
CONFLICT = {"model": ErrorResponse, "description": "Book with the provided ISBN already exists"}
INVALID = {"model": ValidationErrorResponse, "description": "Invalid input"}


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: INVALID, 409: CONFLICT},
    summary="Create a new book",
)
def create_book(book_in: BookRequest, service: BookService = Depends(get_book_service)):
    """Adds a new book. The ISBN must be unique."""
    return service.create_book(book_in)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: NOT_FOUND},
    summary="Retrieve a book by ID",
)
def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    return service.get_book_by_id(book_id)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={400: INVALID, 404: NOT_FOUND, 409: CONFLICT},
    summary="Update an existing book",
)
def update_book(book_id: int, book_in: BookRequest, service: BookService = Depends(get_book_service)):
    """
    Replaces every field of the book. Optional fields left out of the body are
    cleared. The ISBN cannot match another book's ISBN.
    """
    return service.update_book(book_id, book_in)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: NOT_FOUND},
    summary="Delete a book by ID",
)
def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=BookPage,
    responses={400: INVALID},
    summary="Retrieve a paginated list of books with optional filters",
)
def list_books(
    title: Optional[str] = Query(None, description="Filter books by title", examples=["Effective Java"]),
    author: Optional[str] = Query(None, description="Filter books by author", examples=["Joshua Bloch"]),
    category: Optional[str] = Query(None, description="Filter books by category", examples=["Programming"]),
    isbn: Optional[str] = Query(None, description="Filter books by ISBN", examples=["9780134685991"]),
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Records per page"),
    sort_by: str = Query("id", alias="sortBy", description="Field to sort by"),
    sort_dir: str = Query("asc", alias="sortDir", description="Sort direction, 'asc' or 'desc'"),
    service: BookService = Depends(get_book_service),
):
    """
    Lists books matching every given filter (case-insensitive, partial match),
    sorted and paginated.
    """
    filters = BookFilters(title=title, author=author, category=category, isbn=isbn)
    page_request = PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    return service.list_books(filters, page_request)
