"""
Base exception classes for the Wedding Portal backend.

Each module defines its own errors on top of these bases. A base carries
the HTTP status the API answers with, so route handlers can let domain
errors propagate to the app-level handler.
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for all portal errors.

    Attributes:
        message: Human-readable description shown to the caller
        code: Stable machine-readable code (defaults to the class name)
        details: Extra context echoed in the error response
        status_code: HTTP status for API responses
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PortalError):
    """A profile, form, template or slot does not exist (or is hidden by RLS)."""

    status_code = 404


class ValidationError(PortalError):
    """Input the portal cannot accept as given."""

    status_code = 422


class ConflictError(PortalError):
    """The request clashes with current state, e.g. a slot already booked."""

    status_code = 409


class AuthenticationError(PortalError):
    """No usable session: bad credentials, unconfirmed email, expired token."""

    status_code = 401


class AuthorizationError(PortalError):
    """Signed in, but the role or row-level policy forbids the operation."""

    status_code = 403


class ExternalServiceError(PortalError):
    """The persistence backend or another upstream service failed."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
