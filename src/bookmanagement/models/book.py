"""
Modelo ORM para la entidad Book.
Define los campos de un libro, su restricción de unicidad sobre el ISBN y
las fechas de creación y actualización.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Date, UniqueConstraint
from bookmanagement.db.session import Base

class Book(Base):
    """
    Representa un libro en la base de datos.

    Atributos:
        id (int): Identificador primario del libro.
        title (str): Título del libro.
        author (str): Autor del libro.
        isbn (str): ISBN-13 único del libro.
        publication_date (date): Fecha de publicación.
        category (str): Categoría o género.
        description (str): Descripción o sinopsis del libro.
        publisher (str): Editorial.
        price (Decimal): Precio, dos decimales.
        created_at (date): Fecha de alta, no cambia nunca.
        updated_at (date): Fecha de la última modificación.
    """
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), index=True, nullable=False)
    author = Column(String(255), index=True, nullable=False)
    isbn = Column(String(13), index=True, nullable=False)
    publication_date = Column(Date, nullable=True)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    publisher = Column(String(255), nullable=True)
    price = Column(Numeric(12, 2), nullable=True)
    created_at = Column(Date, nullable=False)
    updated_at = Column(Date, nullable=False)

    __table_args__ = (
        UniqueConstraint('isbn', name='uq_books_isbn'),
    )

    def __repr__(self) -> str:
        """
        Representación legible del objeto Book para depuración.

        Returns:
            str: Cadena representando el libro.
        """
        return f"<Book(id={self.id}, title='{self.title[:30]}...', isbn='{self.isbn}')>"
