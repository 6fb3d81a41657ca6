# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os
import sys

# Add the src directory to the Python path so tests run without an install
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
src_path = os.path.join(project_root, 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from bookmanagement.db.session import Base
# Import all models to ensure they are registered with Base
from bookmanagement.models import book  # noqa: F401
from bookmanagement.schemas.book import BookRequest
from bookmanagement.services.book_service import BookService

# --- Test Database Setup ---
# In-memory SQLite; StaticPool keeps a single connection so every session
# (and the TestClient worker thread) sees the same database.
TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(db_engine):
    """Provides a fresh database and session for each test."""
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def book_service(db_session):
    return BookService(db_session)

@pytest.fixture
def make_book_request():
    """Builds a valid BookRequest, overriding any field by keyword."""
    def _make(**overrides):
        data = {
            "title": "Effective Java",
            "author": "Joshua Bloch",
            "isbn": "9780134685991",
            "publication_date": "2018-01-06",
            "category": "Programming",
            "description": "A comprehensive guide to Java best practices.",
            "publisher": "Addison-Wesley",
            "price": "45.99",
        }
        data.update(overrides)
        return BookRequest(**data)
    return _make

@pytest.fixture
def classic_books(book_service, make_book_request):
    """Three stored classics, created in this order."""
    return [
        book_service.create_book(make_book_request(
            title="The Catcher in the Rye", author="J.D. Salinger", isbn="9780316769488",
            category="Classic Fiction", publisher="Little, Brown and Company", price="8.99",
            publication_date="1951-07-16",
        )),
        book_service.create_book(make_book_request(
            title="To Kill a Mockingbird", author="Harper Lee", isbn="9780061120084",
            category="Fiction", publisher="J.B. Lippincott & Co.", price="7.99",
            publication_date="1960-07-11",
            description="A novel about racial injustice in the American South.",
        )),
        book_service.create_book(make_book_request(
            title="1984", author="George Orwell", isbn="9780451524935",
            category="Dystopian", publisher="Secker & Warburg", price="9.99",
            publication_date="1949-06-08",
        )),
    ]
