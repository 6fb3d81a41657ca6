"""
Query construction for book listings.
Translates optional filters and a sort specification into SQLAlchemy
expressions. Nothing here touches the database.
"""

from typing import Dict, List

from sqlalchemy import and_, true, asc, desc
from sqlalchemy.sql.elements import ColumnElement

from ..models.book import Book
from ..schemas.book import BookFilters

LIKE_ESCAPE = "\\"

FILTERABLE_COLUMNS = {
    "title": Book.title,
    "author": Book.author,
    "category": Book.category,
    "isbn": Book.isbn,
}

# JSON field name -> column
SORTABLE_COLUMNS: Dict[str, object] = {
    "id": Book.id,
    "title": Book.title,
    "author": Book.author,
    "isbn": Book.isbn,
    "publicationDate": Book.publication_date,
    "category": Book.category,
    "publisher": Book.publisher,
    "price": Book.price,
    "createdAt": Book.created_at,
    "updatedAt": Book.updated_at,
}


def _escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_book_filter(filters: BookFilters) -> ColumnElement:
    """
    Builds the WHERE clause for a book listing.

    Each provided filter becomes a case-insensitive "contains" match on its
    column; all of them must hold. Unset or empty filters are skipped.

    Args:
        filters (BookFilters): Filter values.

    Returns:
        ColumnElement: AND of the clauses, or `true()` when nothing is set.
    """
    clauses = []
    for field, column in FILTERABLE_COLUMNS.items():
        value = getattr(filters, field)
        if value:
            clauses.append(column.ilike(f"%{_escape_like(value)}%", escape=LIKE_ESCAPE))

    if not clauses:
        return true()
    return and_(*clauses)


def is_sortable(sort_by: str) -> bool:
    return sort_by in SORTABLE_COLUMNS


def build_book_ordering(sort_by: str, ascending: bool = True) -> List:
    """
    Resolves a sort specification to ORDER BY clauses.

    Ties are broken by id so that equal keys keep insertion order.

    Raises:
        KeyError: If `sort_by` is not a sortable field.
    """
    column = SORTABLE_COLUMNS[sort_by]
    ordering = [asc(column) if ascending else desc(column)]
    if sort_by != "id":
        ordering.append(asc(Book.id))
    return ordering
