"""
FAQ management request/response models.
"""

from typing import Optional
from pydantic import BaseModel, Field

from modules.persistence.models import FAQItem, FAQNotification


class FAQSetRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str = "general"
    faqs: list[FAQItem] = Field(default_factory=list)


class FAQSetUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    faqs: Optional[list[FAQItem]] = None


class SendToClientsRequest(BaseModel):
    """Recipients of a send. An empty list means every client."""

    client_ids: list[str] = Field(default_factory=list)


class FAQSendResponse(BaseModel):
    sent: int
    notifications: list[FAQNotification]
