"""
Book management operations.

`BookService` validates payloads, enforces ISBN uniqueness and owns the
transaction for each operation. The database unique constraint is the final
guard against two concurrent writers with the same ISBN; its violation is
reported as `DuplicateIsbnError` just like the pre-check.
"""

import logging
import math
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud
from ..core.exceptions import (
    BookNotFoundError,
    BookValidationError,
    DuplicateIsbnError,
    StorageFailureError,
)
from ..models.book import Book
from ..schemas.book import BookFilters, BookPage, BookRequest, BookResponse, PageRequest
from .validation import ensure_valid_book

logger = logging.getLogger(__name__)


def _is_isbn_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: books.isbn"; postgres names uq_books_isbn
    return "isbn" in str(exc.orig).lower()


class BookService:
    """
    Create, read, update, delete and list books.

    Args:
        db (Session): Session used as the record store for every operation.
    """

    def __init__(self, db: Session):
        self.db = db

    def _write(self, action, isbn: Optional[str] = None, conflict_message: Optional[str] = None):
        """
        Runs a store mutation and commits it as one unit.

        On failure the session is rolled back. A unique-constraint violation on
        the ISBN becomes `DuplicateIsbnError`; anything else `StorageFailureError`.
        """
        try:
            result = action()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if isbn is not None and _is_isbn_violation(e):
                logger.warning(f"ISBN {isbn} rejected by unique constraint")
                raise DuplicateIsbnError(isbn, conflict_message) from e
            logger.exception(f"Integrity error while writing book: {e}")
            raise StorageFailureError("Failed to persist book", original=e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Database error while writing book: {e}")
            raise StorageFailureError("Failed to persist book", original=e) from e
        return result

    def _read(self, action):
        try:
            return action()
        except SQLAlchemyError as e:
            logger.exception(f"Database error while reading books: {e}")
            raise StorageFailureError("Failed to read books", original=e) from e

    def _get_or_raise(self, book_id: int) -> Book:
        db_book = self._read(lambda: crud.get_book_by_id(self.db, book_id))
        if not db_book:
            logger.warning(f"Book not found with ID: {book_id}")
            raise BookNotFoundError(book_id)
        return db_book

    def create_book(self, book_in: BookRequest) -> BookResponse:
        """
        Creates a book.

        Raises:
            BookValidationError: Invalid payload.
            DuplicateIsbnError: The ISBN is already taken.
            StorageFailureError: The database rejected the write.
        """
        logger.info(f"Attempting to create a new book with ISBN: {book_in.isbn}")
        ensure_valid_book(book_in)

        if self._read(lambda: crud.exists_by_isbn(self.db, book_in.isbn)):
            logger.warning(f"Creation failed: Book with ISBN {book_in.isbn} already exists")
            raise DuplicateIsbnError(book_in.isbn)

        db_book = self._write(lambda: crud.create_book(self.db, book_in), isbn=book_in.isbn)
        self.db.refresh(db_book)

        logger.info(f"Book created successfully with ID: {db_book.id}")
        return BookResponse.model_validate(db_book)

    def update_book(self, book_id: int, book_in: BookRequest) -> BookResponse:
        """
        Replaces every mutable field of a book.

        Optional fields missing from `book_in` are cleared.

        Raises:
            BookValidationError: Invalid payload.
            BookNotFoundError: No book with `book_id`.
            DuplicateIsbnError: Another book already has `book_in.isbn`.
            StorageFailureError: The database rejected the write.
        """
        logger.info(f"Attempting to update book with ID: {book_id}")
        ensure_valid_book(book_in)

        db_book = self._get_or_raise(book_id)
        conflict_message = f"Another book with ISBN {book_in.isbn} already exists"

        if db_book.isbn != book_in.isbn and self._read(lambda: crud.exists_by_isbn(self.db, book_in.isbn)):
            logger.warning(f"Update failed: Another book with ISBN {book_in.isbn} already exists")
            raise DuplicateIsbnError(book_in.isbn, conflict_message)

        self._write(
            lambda: crud.update_book(self.db, db_book, book_in),
            isbn=book_in.isbn,
            conflict_message=conflict_message,
        )
        self.db.refresh(db_book)

        logger.info(f"Book updated successfully with ID: {db_book.id}")
        return BookResponse.model_validate(db_book)

    def get_book_by_id(self, book_id: int) -> BookResponse:
        """
        Raises:
            BookNotFoundError: No book with `book_id`.
        """
        logger.info(f"Fetching book with ID: {book_id}")
        return BookResponse.model_validate(self._get_or_raise(book_id))

    def delete_book(self, book_id: int) -> None:
        """
        Permanently deletes a book.

        Raises:
            BookNotFoundError: No book with `book_id`.
        """
        logger.info(f"Attempting to delete book with ID: {book_id}")

        if not self._read(lambda: crud.exists_by_id(self.db, book_id)):
            logger.warning(f"Deletion failed: Book not found with ID: {book_id}")
            raise BookNotFoundError(book_id)

        if not self._write(lambda: crud.delete_book_by_id(self.db, book_id)):
            # Removed by a concurrent request after the existence check
            raise BookNotFoundError(book_id)
        logger.info(f"Book deleted successfully with ID: {book_id}")

    def list_books(self, filters: BookFilters, page_request: PageRequest) -> BookPage:
        """
        Lists books matching every provided filter, one page at a time.

        Raises:
            BookValidationError: `page_request.sort_by` is not a sortable field, or
                the page window falls outside what the database can address.
        """
        logger.info(
            f"Fetching books with filters - Title: {filters.title}, Author: {filters.author}, "
            f"Category: {filters.category}, ISBN: {filters.isbn}"
        )
        if not crud.is_sortable(page_request.sort_by):
            raise BookValidationError({"sortBy": f"Unsupported sort field: {page_request.sort_by}"})
        if not crud.is_storable_int(page_request.size):
            raise BookValidationError({"size": "Page size is too large"})
        if not crud.is_storable_int(page_request.offset):
            raise BookValidationError({"page": "Page index is too large"})

        books, total = self._read(lambda: crud.query_books(
            self.db,
            filters,
            offset=page_request.offset,
            limit=page_request.size,
            sort_by=page_request.sort_by,
            ascending=page_request.ascending,
        ))
        total_pages = math.ceil(total / page_request.size)

        return BookPage(
            content=[BookResponse.model_validate(book) for book in books],
            total_elements=total,
            total_pages=total_pages,
            page=page_request.page,
            size=page_request.size,
            number_of_elements=len(books),
            first=page_request.page == 0,
            last=page_request.page + 1 >= total_pages,
            empty=not books,
        )
