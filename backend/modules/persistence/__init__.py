"""
Persistence module.

The single gateway through which every other module reads and writes
portal data.

Public API:
- IPersistenceBackend: Interface for all CRUD operations
- SupabaseBackend: Live backend (Supabase/PostgREST)
- InMemoryBackend: Deterministic demo backend
- get_persistence_backend: Pick a backend from configuration
"""

from .interfaces import IPersistenceBackend
from .models import (
    FieldValue,
    FieldMap,
    UserRole,
    UserProfile,
    WeddingForm,
    ClientRecord,
    EmailTemplate,
    ScheduledEmail,
    ScheduledEmailStatus,
    FAQItem,
    FAQSet,
    FAQNotification,
    CustomFormField,
    CustomForm,
    FormRequest,
    FormRequestStatus,
    AvailabilitySlot,
    Meeting,
    IntegrationSettings,
)
from .exceptions import (
    RecordNotFoundError,
    PermissionDeniedError,
    BackendTransportError,
)
from .memory_backend import InMemoryBackend
from .supabase_backend import SupabaseBackend
from .factory import (
    get_persistence_backend,
    get_demo_backend,
    reset_demo_backend,
)

__all__ = [
    # Interface
    "IPersistenceBackend",
    # Models
    "FieldValue",
    "FieldMap",
    "UserRole",
    "UserProfile",
    "WeddingForm",
    "ClientRecord",
    "EmailTemplate",
    "ScheduledEmail",
    "ScheduledEmailStatus",
    "FAQItem",
    "FAQSet",
    "FAQNotification",
    "CustomFormField",
    "CustomForm",
    "FormRequest",
    "FormRequestStatus",
    "AvailabilitySlot",
    "Meeting",
    "IntegrationSettings",
    # Exceptions
    "RecordNotFoundError",
    "PermissionDeniedError",
    "BackendTransportError",
    # Backends
    "InMemoryBackend",
    "SupabaseBackend",
    "get_persistence_backend",
    "get_demo_backend",
    "reset_demo_backend",
]
