from .crud_book import (
    get_book_by_id,
    get_book_by_isbn,
    exists_by_isbn,
    exists_by_id,
    create_book,
    update_book,
    delete_book_by_id,
    query_books,
    is_storable_int,
)
from .filters import build_book_filter, build_book_ordering, is_sortable

__all__ = [
    "get_book_by_id",
    "get_book_by_isbn",
    "exists_by_isbn",
    "exists_by_id",
    "create_book",
    "update_book",
    "delete_book_by_id",
    "query_books",
    "is_storable_int",
    "build_book_filter",
    "build_book_ordering",
    "is_sortable",
]
