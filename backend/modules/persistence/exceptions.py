"""
Persistence gateway exceptions.

Every backend failure is classified into one of three kinds so callers
can tell a missing row from a refused one from a broken connection.
"""

from typing import Optional

from shared.exceptions import (
    NotFoundError,
    AuthorizationError,
    ExternalServiceError,
)


class RecordNotFoundError(NotFoundError):
    """Raised when the requested row does not exist (or is invisible under RLS)."""

    def __init__(self, resource: str, record_id: Optional[str] = None):
        super().__init__(
            f"{resource} not found: {record_id}" if record_id else f"{resource} not found",
            code="RECORD_NOT_FOUND",
            details={"resource": resource, "record_id": record_id},
        )


class PermissionDeniedError(AuthorizationError):
    """Raised when the backend's access-control layer refuses the operation."""

    def __init__(self, resource: str, reason: Optional[str] = None):
        super().__init__(
            f"Permission denied on {resource}",
            code="PERMISSION_DENIED",
            details={"resource": resource, "reason": reason},
        )


class BackendTransportError(ExternalServiceError):
    """Raised when the backend cannot be reached or answers with an unexpected error."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            f"Backend request failed: {message}",
            service="supabase",
            code="BACKEND_UNAVAILABLE",
            details={"original_error": original_error},
        )
