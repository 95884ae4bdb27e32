"""FAQ sets and their delivery to clients."""

from .models import FAQSetRequest, FAQSetUpdate, SendToClientsRequest, FAQSendResponse
from .service import FAQService

__all__ = [
    "FAQSetRequest",
    "FAQSetUpdate",
    "SendToClientsRequest",
    "FAQSendResponse",
    "FAQService",
]
