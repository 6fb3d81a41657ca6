"""
Pydantic schemas for the Book entity.
Defines request, response, filter and page models. JSON keys are camelCase;
Python attributes stay snake_case.
"""

import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting field names too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookRequest(CamelModel):
    """
    Payload for creating or updating a book.

    Required fields are typed as optional on purpose: emptiness and format rules
    are checked by `services.validation` so that every violation is reported
    together with its own message.
    """
    title: Optional[str] = Field(None, examples=["Effective Java"])
    author: Optional[str] = Field(None, examples=["Joshua Bloch"])
    isbn: Optional[str] = Field(None, examples=["9780134685991"])
    publication_date: Optional[datetime.date] = Field(None, examples=["2018-01-06"])
    category: Optional[str] = Field(None, examples=["Programming"])
    description: Optional[str] = None
    publisher: Optional[str] = Field(None, examples=["Addison-Wesley"])
    price: Optional[Decimal] = Field(None, examples=["39.99"])


class BookResponse(CamelModel):
    """Stored book as returned to callers."""
    id: int
    title: str
    author: str
    isbn: str
    publication_date: Optional[datetime.date] = None
    category: Optional[str] = None
    description: Optional[str] = None
    publisher: Optional[str] = None
    price: Optional[Decimal] = None
    created_at: datetime.date
    updated_at: datetime.date

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Optional[Decimal]) -> Optional[float]:
        return float(price) if price is not None else None


class BookFilters(BaseModel):
    """Optional case-insensitive substring filters for listing books."""
    title: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    isbn: Optional[str] = None


class PageRequest(CamelModel):
    """Zero-based page index, page size and sort specification."""
    page: int = Field(0, ge=0)
    size: int = Field(10, ge=1)
    sort_by: str = "id"
    sort_dir: str = "asc"

    @property
    def ascending(self) -> bool:
        return self.sort_dir.lower() == "asc"

    @property
    def offset(self) -> int:
        return self.page * self.size


class BookPage(CamelModel):
    """One page of books plus total-count metadata."""
    content: List[BookResponse]
    total_elements: int
    total_pages: int
    page: int
    size: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool
