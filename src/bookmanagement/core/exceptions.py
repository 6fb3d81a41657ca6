"""
Domain errors raised by the book service.

Every failed operation raises exactly one of these. The HTTP layer maps them to
status codes (400, 404, 409 and 500 respectively).
"""

from typing import Dict, Optional


class BookServiceError(Exception):
    """Base class for all book service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookValidationError(BookServiceError):
    """
    The input violates one or more field constraints.

    Attributes:
        errors (Dict[str, str]): Field name -> human-readable reason.
    """

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = dict(errors)


class BookNotFoundError(BookServiceError):
    """No book exists with the referenced id."""

    def __init__(self, book_id: int):
        super().__init__(f"Book not found with ID: {book_id}")
        self.book_id = book_id


class DuplicateIsbnError(BookServiceError):
    """The ISBN is already used by a different book."""

    def __init__(self, isbn: str, message: Optional[str] = None):
        super().__init__(message or f"Book with ISBN {isbn} already exists")
        self.isbn = isbn


class StorageFailureError(BookServiceError):
    """The database is unreachable or rejected a write for a reason other than ISBN uniqueness."""

    def __init__(self, message: str = "Storage failure", original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original
