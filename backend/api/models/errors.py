"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Any, Optional

from shared.exceptions import PortalError


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
    details: dict[str, Any] = {}

    @classmethod
    def from_exception(cls, exc: PortalError) -> "ErrorResponse":
        return cls(
            error=exc.__class__.__name__,
            detail=exc.message,
            code=exc.code,
            details=exc.details,
        )


class ValidationErrorResponse(BaseModel):
    """Validation error response format."""

    error: str = "Validation Error"
    detail: list[dict]
