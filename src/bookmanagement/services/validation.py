"""
Field rules for book payloads.

`collect_book_errors` checks every rule and returns all violations at once as a
JSON field name -> message mapping; `ensure_valid_book` raises it.
"""

import datetime
import re
from decimal import Decimal
from typing import Dict, Optional

from ..core.exceptions import BookValidationError
from ..schemas.book import BookRequest

ISBN_PATTERN = re.compile(r"[0-9]{13}")
PRICE_MAX_INTEGER_DIGITS = 10
PRICE_MAX_FRACTION_DIGITS = 2


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _price_digits(price: Decimal):
    """Returns (integer digits, fraction digits) of a finite decimal."""
    sign, digits, exponent = price.normalize().as_tuple()
    if exponent >= 0:
        return len(digits) + exponent, 0
    fraction = -exponent
    return max(len(digits) - fraction, 0), fraction


def collect_book_errors(book: BookRequest, today: Optional[datetime.date] = None) -> Dict[str, str]:
    """
    Checks a book payload against all field rules.

    Args:
        book (BookRequest): Payload to check.
        today (Optional[datetime.date]): Reference date for the publication date rule.

    Returns:
        Dict[str, str]: One message per offending field; empty when valid.
    """
    today = today or datetime.date.today()
    errors: Dict[str, str] = {}

    if _is_blank(book.title):
        errors["title"] = "Title is required"
    if _is_blank(book.author):
        errors["author"] = "Author is required"

    if _is_blank(book.isbn):
        errors["isbn"] = "ISBN is required"
    elif not ISBN_PATTERN.fullmatch(book.isbn):
        errors["isbn"] = "ISBN must be a 13-digit number"

    if book.publication_date is not None and book.publication_date > today:
        errors["publicationDate"] = "Publication date cannot be in the future"

    if book.price is not None:
        if not book.price.is_finite() or book.price <= 0:
            errors["price"] = "Price must be greater than zero"
        else:
            integer_digits, fraction_digits = _price_digits(book.price)
            if integer_digits > PRICE_MAX_INTEGER_DIGITS or fraction_digits > PRICE_MAX_FRACTION_DIGITS:
                errors["price"] = (
                    f"Price must have at most {PRICE_MAX_INTEGER_DIGITS} integer digits "
                    f"and {PRICE_MAX_FRACTION_DIGITS} decimal places"
                )

    return errors


def ensure_valid_book(book: BookRequest) -> None:
    """
    Raises:
        BookValidationError: If any field rule is violated.
    """
    errors = collect_book_errors(book)
    if errors:
        raise BookValidationError(errors)
