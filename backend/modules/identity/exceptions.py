"""
Identity module exceptions.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when the auth provider rejects an email/password pair."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailConfirmationRequiredError(AuthenticationError):
    """Raised when sign-up succeeded but no session was issued yet."""

    def __init__(self, email: str):
        super().__init__(
            "Check your email to confirm your account before signing in",
            code="EMAIL_CONFIRMATION_REQUIRED",
            details={"email": email},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )
