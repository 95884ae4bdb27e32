"""
Email module.

Templates with merge fields, immediate sends and scheduled sends.

Public API:
- EmailService: Template CRUD, preview, send and schedule
- merge_placeholders: Replace {{field}} tokens in a template
- IEmailDispatcher / LoggingEmailDispatcher: Outbound delivery
"""

from .merge import (
    CLIENT_MERGE_FIELDS,
    MERGE_FIELDS,
    token,
    format_wedding_date,
    build_merge_values,
    merge_placeholders,
)
from .dispatcher import DispatchResult, IEmailDispatcher, LoggingEmailDispatcher
from .models import (
    EmailTemplateRequest,
    EmailTemplateUpdate,
    EmailPreview,
    SendEmailRequest,
    SendEmailResponse,
    ScheduleEmailRequest,
)
from .service import EmailService

__all__ = [
    # Merge
    "CLIENT_MERGE_FIELDS",
    "MERGE_FIELDS",
    "token",
    "format_wedding_date",
    "build_merge_values",
    "merge_placeholders",
    # Dispatch
    "DispatchResult",
    "IEmailDispatcher",
    "LoggingEmailDispatcher",
    # Models
    "EmailTemplateRequest",
    "EmailTemplateUpdate",
    "EmailPreview",
    "SendEmailRequest",
    "SendEmailResponse",
    "ScheduleEmailRequest",
    # Service
    "EmailService",
]
