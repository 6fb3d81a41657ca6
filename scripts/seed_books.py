"""
Script para poblar la base de datos con un catálogo de libros de ejemplo.

Los libros pasan por `BookService`, así que se validan igual que por la API.
Los que ya existen (mismo ISBN) se saltan.

Uso:
    python scripts/seed_books.py
"""

import logging
from typing import Any, Dict, List

from bookmanagement.core.exceptions import BookValidationError, DuplicateIsbnError
from bookmanagement.core.logging_config import setup_logging
from bookmanagement.db.session import SessionLocal, init_db
from bookmanagement.schemas.book import BookRequest
from bookmanagement.services.book_service import BookService

logger = logging.getLogger(__name__)

SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "Effective Java",
        "author": "Joshua Bloch",
        "isbn": "9780134685991",
        "publication_date": "2018-01-06",
        "category": "Programming",
        "description": "A comprehensive guide to Java programming best practices.",
        "publisher": "Addison-Wesley",
        "price": "45.99",
    },
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "publication_date": "1925-04-10",
        "category": "Fiction",
        "description": "A novel about the American dream and the roaring twenties.",
        "publisher": "Scribner",
        "price": "10.99",
    },
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "9780061120084",
        "publication_date": "1960-07-11",
        "category": "Fiction",
        "description": "A novel about racial injustice in the American South.",
        "publisher": "J.B. Lippincott & Co.",
        "price": "7.99",
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "9780451524935",
        "publication_date": "1949-06-08",
        "category": "Dystopian Fiction",
        "publisher": "Secker & Warburg",
        "price": "9.99",
    },
    {
        "title": "The Catcher in the Rye",
        "author": "J.D. Salinger",
        "isbn": "9780316769488",
        "publication_date": "1951-07-16",
        "category": "Classic Fiction",
        "publisher": "Little, Brown and Company",
        "price": "8.99",
    },
]

def seed_books(service: BookService) -> int:
    """
    Añade los libros de ejemplo que todavía no existan.

    Args:
        service (BookService): Servicio ligado a una sesión abierta.

    Returns:
        int: Número de libros añadidos.
    """
    added = 0
    for data in SAMPLE_BOOKS:
        try:
            book = service.create_book(BookRequest(**data))
        except DuplicateIsbnError:
            logger.info(f"Libro ya existe (ISBN): '{data['title']}' [{data['isbn']}]. Saltando.")
            continue
        except BookValidationError as e:
            logger.warning(f"Libro inválido '{data['title']}': {e.errors}. Saltando.")
            continue
        added += 1
        logger.info(f"  Añadido: '{book.title}' (ID: {book.id})")
    return added

if __name__ == "__main__":
    setup_logging()
    init_db()
    db_session = SessionLocal()
    try:
        total = seed_books(BookService(db_session))
        logger.info(f"--- Población de Libros Finalizada: {total} libros añadidos en total. ---")
    finally:
        logger.info("Cerrando sesión de base de datos.")
        db_session.close()
