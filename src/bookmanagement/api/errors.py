"""
Exception handlers mapping domain errors to HTTP responses.
"""

import logging
from datetime import datetime
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookmanagement.core.config import settings
from bookmanagement.core.exceptions import (
    BookNotFoundError,
    BookValidationError,
    DuplicateIsbnError,
    StorageFailureError,
)
from bookmanagement.schemas.common import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, detail: str = None) -> JSONResponse:
    body = ErrorResponse(status_code=status_code, message=message, timestamp=datetime.now(), detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _validation_response(errors: Dict[str, str]) -> JSONResponse:
    body = ValidationErrorResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        timestamp=datetime.now(),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


async def book_validation_handler(request: Request, exc: BookValidationError):
    return _validation_response(exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Reports malformed bodies and query parameters as field -> message pairs."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "request"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return _validation_response(errors)


async def not_found_handler(request: Request, exc: BookNotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message)


async def conflict_handler(request: Request, exc: DuplicateIsbnError):
    return _error_response(status.HTTP_409_CONFLICT, exc.message)


async def storage_failure_handler(request: Request, exc: StorageFailureError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.original}")
    detail = str(exc.original) if settings.DEBUG and exc.original else None
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", detail)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookValidationError, book_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(BookNotFoundError, not_found_handler)
    app.add_exception_handler(DuplicateIsbnError, conflict_handler)
    app.add_exception_handler(StorageFailureError, storage_failure_handler)
