"""
FastAPI application for the Book Management API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookmanagement.core.config import settings
from bookmanagement.core.logging_config import setup_logging
from bookmanagement.db.session import get_db, init_db
from bookmanagement.schemas.common import HealthResponse
from .books import router as books_router
from .errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Creates the schema on start-up."""
    setup_logging()
    logger.info(f"Starting Book Management API in {settings.ENVIRONMENT} environment")
    init_db()
    yield
    logger.info("Shutting down Book Management API")


app = FastAPI(
    title=settings.API_TITLE,
    description="API for creating, retrieving, updating, deleting and listing books.",
    version=settings.API_VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(books_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "unhealthy"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(),
        version=settings.API_VERSION,
        database_status=db_status,
    )


def main():
    """Run the API server."""
    uvicorn.run(
        "bookmanagement.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
