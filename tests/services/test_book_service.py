# tests/services/test_book_service.py
import datetime
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from bookmanagement.core.exceptions import (
    BookNotFoundError,
    BookValidationError,
    DuplicateIsbnError,
    StorageFailureError,
)
from bookmanagement.schemas.book import BookFilters, PageRequest

ALL = BookFilters()

# --- create ---

def test_create_then_get_returns_equal_record(book_service, make_book_request):
    created = book_service.create_book(make_book_request())

    assert created.id is not None
    assert created.isbn == "9780134685991"
    assert created.created_at == datetime.date.today()
    assert created.updated_at == created.created_at
    assert book_service.get_book_by_id(created.id) == created

def test_create_with_only_required_fields(book_service, make_book_request):
    created = book_service.create_book(make_book_request(
        title="Minimal Book", isbn="9781234567890", publication_date=None,
        category=None, description=None, publisher=None, price=None,
    ))

    assert created.title == "Minimal Book"
    assert created.price is None
    assert created.publication_date is None

def test_create_duplicate_isbn_raises_conflict(book_service, make_book_request):
    book_service.create_book(make_book_request())

    with pytest.raises(DuplicateIsbnError) as exc_info:
        book_service.create_book(make_book_request(title="Another Title"))

    assert exc_info.value.isbn == "9780134685991"
    assert "already exists" in exc_info.value.message
    assert book_service.list_books(ALL, PageRequest()).total_elements == 1

def test_create_race_is_closed_by_unique_constraint(book_service, make_book_request):
    """A writer that passed the pre-check still gets a conflict from the constraint."""
    book_service.create_book(make_book_request())

    with patch("bookmanagement.crud.exists_by_isbn", return_value=False):
        with pytest.raises(DuplicateIsbnError):
            book_service.create_book(make_book_request(title="Racing Copy"))

    page = book_service.list_books(ALL, PageRequest())
    assert page.total_elements == 1
    assert page.content[0].title == "Effective Java"

def test_create_rejects_non_ascii_isbn_digits(book_service, make_book_request):
    with pytest.raises(BookValidationError) as exc_info:
        book_service.create_book(make_book_request(isbn="٩" * 13))

    assert "13-digit" in exc_info.value.errors["isbn"]
    assert book_service.list_books(ALL, PageRequest()).total_elements == 0

def test_create_invalid_input_persists_nothing(book_service, make_book_request):
    with pytest.raises(BookValidationError) as exc_info:
        book_service.create_book(make_book_request(title="  ", isbn="invalid_isbn", price="0"))

    assert set(exc_info.value.errors) == {"title", "isbn", "price"}
    assert book_service.list_books(ALL, PageRequest()).total_elements == 0

def test_create_storage_failure_is_propagated(book_service, make_book_request):
    with patch.object(book_service.db, "commit", side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))):
        with pytest.raises(StorageFailureError) as exc_info:
            book_service.create_book(make_book_request())

    assert isinstance(exc_info.value.original, OperationalError)
    assert book_service.list_books(ALL, PageRequest()).total_elements == 0

# --- get ---

def test_get_missing_book_raises_not_found(book_service):
    with pytest.raises(BookNotFoundError) as exc_info:
        book_service.get_book_by_id(99)

    assert exc_info.value.book_id == 99
    assert exc_info.value.message == "Book not found with ID: 99"

# --- update ---

def test_update_book(book_service, make_book_request):
    created = book_service.create_book(make_book_request())

    updated = book_service.update_book(created.id, make_book_request(
        title="Effective Java - Updated", category="Classic Programming", price="8.99",
    ))

    assert updated.id == created.id
    assert updated.title == "Effective Java - Updated"
    assert updated.category == "Classic Programming"
    assert str(updated.price) == "8.99"
    assert updated.created_at == created.created_at
    assert updated.updated_at >= updated.created_at

def test_update_with_own_isbn_is_not_a_conflict(book_service, make_book_request):
    created = book_service.create_book(make_book_request())

    updated = book_service.update_book(created.id, make_book_request(title="Same ISBN"))

    assert updated.isbn == created.isbn
    assert updated.title == "Same ISBN"

def test_update_to_another_books_isbn_raises_conflict(book_service, make_book_request):
    book_a = book_service.create_book(make_book_request(title="Book A", isbn="1111111111111"))
    book_b = book_service.create_book(make_book_request(title="Book B", isbn="2222222222222"))

    with pytest.raises(DuplicateIsbnError) as exc_info:
        book_service.update_book(book_a.id, make_book_request(title="Book A renamed", isbn=book_b.isbn))

    assert exc_info.value.message == "Another book with ISBN 2222222222222 already exists"
    assert book_service.get_book_by_id(book_a.id) == book_a

def test_update_race_is_closed_by_unique_constraint(book_service, make_book_request):
    book_a = book_service.create_book(make_book_request(title="Book A", isbn="1111111111111"))
    book_service.create_book(make_book_request(title="Book B", isbn="2222222222222"))

    with patch("bookmanagement.crud.exists_by_isbn", return_value=False):
        with pytest.raises(DuplicateIsbnError):
            book_service.update_book(book_a.id, make_book_request(title="Book A renamed", isbn="2222222222222"))

    assert book_service.get_book_by_id(book_a.id) == book_a

def test_update_missing_book_raises_not_found(book_service, make_book_request):
    with pytest.raises(BookNotFoundError):
        book_service.update_book(12345, make_book_request())

def test_update_is_a_full_replace(book_service, make_book_request):
    """Optional fields left out of the update are cleared, not kept."""
    created = book_service.create_book(make_book_request())
    assert created.description is not None

    updated = book_service.update_book(created.id, make_book_request(
        description=None, publisher=None, category=None, price=None, publication_date=None,
    ))

    assert updated.description is None
    assert updated.publisher is None
    assert updated.category is None
    assert updated.price is None
    assert updated.publication_date is None

def test_update_keeps_optional_fields_when_resent(book_service, make_book_request):
    created = book_service.create_book(make_book_request())

    updated = book_service.update_book(created.id, make_book_request(title="Retitled"))

    assert updated.description == created.description
    assert updated.publisher == created.publisher

def test_update_invalid_input_leaves_record_unchanged(book_service, make_book_request):
    created = book_service.create_book(make_book_request())
    tomorrow = datetime.date.today() + datetime.timedelta(days=1)

    with pytest.raises(BookValidationError) as exc_info:
        book_service.update_book(created.id, make_book_request(publication_date=tomorrow))

    assert "future" in exc_info.value.errors["publicationDate"]
    assert book_service.get_book_by_id(created.id) == created

# --- delete ---

def test_delete_book(book_service, make_book_request):
    created = book_service.create_book(make_book_request())

    book_service.delete_book(created.id)

    with pytest.raises(BookNotFoundError):
        book_service.get_book_by_id(created.id)
    assert book_service.list_books(ALL, PageRequest()).empty

def test_delete_missing_book_raises_not_found(book_service):
    with pytest.raises(BookNotFoundError):
        book_service.delete_book(404)

@pytest.mark.parametrize("book_id", [10**20, -(10**20)])
def test_ids_beyond_database_range_are_not_found(book_service, make_book_request, book_id):
    with pytest.raises(BookNotFoundError) as exc_info:
        book_service.get_book_by_id(book_id)
    assert exc_info.value.book_id == book_id

    with pytest.raises(BookNotFoundError):
        book_service.update_book(book_id, make_book_request())
    with pytest.raises(BookNotFoundError):
        book_service.delete_book(book_id)

# --- list ---

def test_list_all_books_in_id_order(book_service, classic_books):
    page = book_service.list_books(ALL, PageRequest())

    assert [b.title for b in page.content] == ["The Catcher in the Rye", "To Kill a Mockingbird", "1984"]
    assert page.total_elements == 3
    assert page.total_pages == 1

def test_list_filter_by_title(book_service, classic_books):
    page = book_service.list_books(BookFilters(title="1984"), PageRequest())

    assert [b.title for b in page.content] == ["1984"]

def test_list_filter_by_author(book_service, classic_books):
    page = book_service.list_books(BookFilters(author="Harper Lee"), PageRequest())

    assert len(page.content) == 1
    assert page.content[0].title == "To Kill a Mockingbird"

def test_list_filter_by_category_is_case_insensitive_substring(book_service, classic_books):
    page = book_service.list_books(BookFilters(category="Fiction"), PageRequest())

    assert sorted(b.category for b in page.content) == ["Classic Fiction", "Fiction"]

def test_list_filter_by_isbn(book_service, classic_books):
    page = book_service.list_books(BookFilters(isbn="9780061120084"), PageRequest())

    assert [b.title for b in page.content] == ["To Kill a Mockingbird"]

def test_list_multiple_filters(book_service, classic_books):
    page = book_service.list_books(BookFilters(title="1984", author="George Orwell"), PageRequest())

    assert len(page.content) == 1
    assert page.content[0].author == "George Orwell"

def test_list_pagination_and_sorting(book_service, classic_books):
    page = book_service.list_books(ALL, PageRequest(page=0, size=2, sort_by="title", sort_dir="asc"))

    assert [b.title for b in page.content] == ["1984", "The Catcher in the Rye"]
    assert page.total_elements == 3
    assert page.total_pages == 2
    assert page.first is True
    assert page.last is False
    assert page.number_of_elements == 2

def test_list_last_page(book_service, classic_books):
    page = book_service.list_books(ALL, PageRequest(page=1, size=2, sort_by="title", sort_dir="ASC"))

    assert [b.title for b in page.content] == ["To Kill a Mockingbird"]
    assert page.last is True

def test_list_sort_direction_other_than_asc_is_descending(book_service, classic_books):
    page = book_service.list_books(ALL, PageRequest(sort_by="title", sort_dir="desc"))

    assert [b.title for b in page.content] == ["To Kill a Mockingbird", "The Catcher in the Rye", "1984"]

def test_list_empty_result(book_service):
    page = book_service.list_books(BookFilters(title="nothing"), PageRequest())

    assert page.content == []
    assert page.total_elements == 0
    assert page.total_pages == 0
    assert page.empty is True

def test_list_unknown_sort_field(book_service):
    with pytest.raises(BookValidationError) as exc_info:
        book_service.list_books(ALL, PageRequest(sort_by="nope"))

    assert "sortBy" in exc_info.value.errors

def test_list_page_beyond_database_range(book_service):
    with pytest.raises(BookValidationError) as exc_info:
        book_service.list_books(ALL, PageRequest(page=10**18, size=100))

    assert "page" in exc_info.value.errors

def test_list_size_beyond_database_range(book_service):
    with pytest.raises(BookValidationError) as exc_info:
        book_service.list_books(ALL, PageRequest(size=2**63))

    assert "size" in exc_info.value.errors
