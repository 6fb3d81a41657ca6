"""
Operaciones CRUD para el modelo Book en la base de datos.
Incluye alta, consulta por ID o ISBN, actualización completa, borrado y
listado filtrado y paginado. Las funciones hacen `flush` pero no `commit`:
la transacción la cierra la capa de servicios.
"""

import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, func, exists
from sqlalchemy.orm import Session

from ..models.book import Book
from ..schemas.book import BookRequest, BookFilters
from .filters import build_book_filter, build_book_ordering

# Signed 64-bit range of INTEGER primary keys and LIMIT/OFFSET values
MIN_DB_INT = -(2 ** 63)
MAX_DB_INT = 2 ** 63 - 1

MUTABLE_FIELDS = (
    "title",
    "author",
    "isbn",
    "publication_date",
    "category",
    "description",
    "publisher",
    "price",
)

def is_storable_int(value: int) -> bool:
    """Indica si el entero cabe en un INTEGER de 64 bits de la base de datos."""
    return MIN_DB_INT <= value <= MAX_DB_INT

def get_book_by_id(db: Session, book_id: int) -> Optional[Book]:
    """
    Recupera un libro por su ID primario.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book_id (int): ID del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe
        (también si el ID no cabe en la columna).
    """
    if not is_storable_int(book_id):
        return None
    return db.get(Book, book_id)

def get_book_by_isbn(db: Session, isbn: str) -> Optional[Book]:
    """
    Recupera un libro por su ISBN.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        isbn (str): ISBN del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe.
    """
    stmt = select(Book).where(Book.isbn == isbn)
    result = db.execute(stmt)
    return result.scalars().first()

def exists_by_isbn(db: Session, isbn: str) -> bool:
    """Indica si algún libro tiene ya este ISBN."""
    return bool(db.scalar(select(exists().where(Book.isbn == isbn))))

def exists_by_id(db: Session, book_id: int) -> bool:
    """Indica si existe un libro con este ID."""
    if not is_storable_int(book_id):
        return False
    return bool(db.scalar(select(exists().where(Book.id == book_id))))

def create_book(db: Session, book: BookRequest, today: Optional[datetime.date] = None) -> Book:
    """
    Inserta un libro nuevo. Fija `created_at` y `updated_at` a la fecha actual.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book (BookRequest): Datos validados del libro.
        today (Optional[datetime.date]): Fecha de alta; por defecto hoy.

    Returns:
        Book: El libro insertado, ya con ID asignado.

    Raises:
        IntegrityError: Si el ISBN ya existe (restricción `uq_books_isbn`).
    """
    today = today or datetime.date.today()
    db_book = Book(
        **book.model_dump(include=set(MUTABLE_FIELDS)),
        created_at=today,
        updated_at=today,
    )
    db.add(db_book)
    db.flush()
    return db_book

def update_book(
    db: Session,
    db_book: Book,
    book: BookRequest,
    today: Optional[datetime.date] = None
) -> Book:
    """
    Sobrescribe todos los campos modificables de `db_book` con `book`.

    Es un reemplazo completo: los campos opcionales ausentes en `book` quedan
    a None. `id` y `created_at` no se tocan; `updated_at` pasa a hoy.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        db_book (Book): Libro persistido a modificar.
        book (BookRequest): Nuevos valores.
        today (Optional[datetime.date]): Fecha de modificación; por defecto hoy.

    Returns:
        Book: El mismo objeto, modificado.

    Raises:
        IntegrityError: Si el nuevo ISBN choca con el de otro libro.
    """
    values = book.model_dump(include=set(MUTABLE_FIELDS))
    for field in MUTABLE_FIELDS:
        setattr(db_book, field, values.get(field))
    db_book.updated_at = max(today or datetime.date.today(), db_book.created_at)
    db.add(db_book)
    db.flush()
    return db_book

def delete_book_by_id(db: Session, book_id: int) -> bool:
    """
    Borra definitivamente un libro.

    Returns:
        bool: True si se borró, False si no existía.
    """
    db_book = get_book_by_id(db, book_id)
    if not db_book:
        return False
    db.delete(db_book)
    db.flush()
    return True

def query_books(
    db: Session,
    filters: BookFilters,
    offset: int = 0,
    limit: int = 10,
    sort_by: str = "id",
    ascending: bool = True
) -> Tuple[List[Book], int]:
    """
    Busca libros que cumplan todos los filtros, ordenados y paginados.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        filters (BookFilters): Filtros por título, autor, categoría e ISBN.
        offset (int): Número de registros a omitir.
        limit (int): Número máximo de registros a devolver.
        sort_by (str): Campo de ordenación (nombre JSON).
        ascending (bool): Orden ascendente si es True.

    Returns:
        Tuple[List[Book], int]: Libros de la página y total de coincidencias.
    """
    criteria = build_book_filter(filters)

    total = db.scalar(select(func.count()).select_from(Book).where(criteria)) or 0

    stmt = (
        select(Book)
        .where(criteria)
        .order_by(*build_book_ordering(sort_by, ascending))
        .offset(offset)
        .limit(limit)
    )
    books = db.execute(stmt).scalars().all()
    return list(books), total
