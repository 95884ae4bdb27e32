"""
Forms module exceptions.
"""

from shared.exceptions import ExternalServiceError


class FormSaveFailedError(ExternalServiceError):
    """Raised when an explicit save could not be persisted."""

    def __init__(self, user_id: str):
        super().__init__(
            "Your wedding details could not be saved. Please try again.",
            service="supabase",
            code="FORM_SAVE_FAILED",
            details={"user_id": user_id},
        )
