"""Custom form builder and form requests."""

from .models import (
    CustomFormRequest,
    CustomFormUpdate,
    SendFormRequest,
    SendFormResponse,
    FormRequestStatusUpdate,
)
from .service import CustomFormService, clean_fields

__all__ = [
    "CustomFormRequest",
    "CustomFormUpdate",
    "SendFormRequest",
    "SendFormResponse",
    "FormRequestStatusUpdate",
    "CustomFormService",
    "clean_fields",
]
