"""
Custom form builder request/response models.
"""

from typing import Optional
from pydantic import BaseModel, Field

from modules.persistence.models import CustomFormField, FormRequest, FormRequestStatus


class CustomFormRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str = "supplier"
    fields: list[CustomFormField] = Field(default_factory=list)


class CustomFormUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    fields: Optional[list[CustomFormField]] = None


class SendFormRequest(BaseModel):
    """Recipients of a form. An empty list means every client."""

    client_ids: list[str] = Field(default_factory=list)


class SendFormResponse(BaseModel):
    sent: int
    requests: list[FormRequest]


class FormRequestStatusUpdate(BaseModel):
    status: FormRequestStatus
