"""
Shared response schemas: error bodies and the health check.
"""

import datetime
from typing import Dict, Optional

from pydantic import Field

from .book import CamelModel


class ErrorResponse(CamelModel):
    """Standard error body."""
    status_code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Error message")
    timestamp: datetime.datetime = Field(..., description="When the error occurred")
    detail: Optional[str] = Field(None, description="Additional error details (debug only)")


class ValidationErrorResponse(ErrorResponse):
    """Error body carrying a field name -> message mapping."""
    errors: Dict[str, str] = Field(default_factory=dict)


class HealthResponse(CamelModel):
    """Health check body."""
    status: str
    timestamp: datetime.datetime
    version: str
    database_status: str
