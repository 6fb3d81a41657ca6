"""
FastAPI dependencies wiring a request-scoped session into the book service.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from bookmanagement.db.session import get_db
from bookmanagement.services.book_service import BookService


def get_book_service(db: Session = Depends(get_db)) -> BookService:
    """One BookService per request, bound to that request's session."""
    return BookService(db)
