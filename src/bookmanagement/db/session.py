"""
Motor y sesiones SQLAlchemy del servicio de libros.

`DATABASE_URL` (ver `core.config`) decide el motor; con SQLite se permite usar
la conexión desde los hilos de trabajo de FastAPI. `get_db` abre una sesión por
petición para `api.dependencies.get_book_service` y `/health`, y los tests la
sustituyen por su propia sesión en memoria. `init_db` crea la tabla `books` al
arrancar la API y desde `scripts/seed_books.py`.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from bookmanagement.core.config import settings

connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """
    Sesión por petición para `BookService`; se cierra al terminar la respuesta.

    El `commit` o `rollback` lo hace `BookService`, no esta función.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None) -> None:
    """
    Crea la tabla `books` y su restricción `uq_books_isbn` si no existen.

    Args:
        bind: Motor a usar. Por defecto `engine`.
    """
    # Registers Book on Base.metadata
    from bookmanagement.models import book  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
