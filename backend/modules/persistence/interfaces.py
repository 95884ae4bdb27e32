"""
Persistence gateway interface.

Other modules depend on IPersistenceBackend, never on a concrete backend.
The live Supabase backend and the in-memory demo backend both satisfy it,
and the composition root picks one from configuration.

Contract for every method: return the requested or updated entity (or
list), or raise one of RecordNotFoundError, PermissionDeniedError or
BackendTransportError. Authorization is not re-checked here; row
ownership is enforced by the backend's row-level security.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    AvailabilitySlot,
    ClientRecord,
    CustomForm,
    EmailTemplate,
    FAQNotification,
    FAQSet,
    FieldMap,
    FormRequest,
    FormRequestStatus,
    IntegrationSettings,
    Meeting,
    ScheduledEmail,
    ScheduledEmailStatus,
    UserProfile,
    WeddingForm,
)


@runtime_checkable
class IPersistenceBackend(Protocol):
    """
    Uniform CRUD surface over all portal entities.
    """

    @property
    def is_demo(self) -> bool:
        """Whether this backend serves synthetic demo data."""
        ...

    # -- Profiles ------------------------------------------------------------

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a profile by user ID.

        Returns:
            UserProfile if found, None otherwise
        """
        ...

    async def create_profile(self, data: dict[str, Any]) -> UserProfile:
        """Insert a profile row and return it."""
        ...

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        """Apply a partial update to a profile."""
        ...

    async def delete_profile(self, user_id: str) -> None:
        """Delete a profile (its wedding form cascades)."""
        ...

    async def list_clients(self) -> list[ClientRecord]:
        """List every client profile joined with its wedding form."""
        ...

    # -- Wedding forms -------------------------------------------------------

    async def get_wedding_form(self, user_id: str) -> Optional[WeddingForm]:
        """
        Get the wedding form owned by a user.

        Returns:
            WeddingForm if one was ever saved, None otherwise
        """
        ...

    async def save_wedding_form(self, user_id: str, form_data: FieldMap) -> WeddingForm:
        """
        Upsert the whole FieldMap for a user (last write wins).
        """
        ...

    # -- Email templates and scheduling --------------------------------------

    async def list_email_templates(self) -> list[EmailTemplate]:
        ...

    async def get_email_template(self, template_id: str) -> EmailTemplate:
        ...

    async def create_email_template(self, data: dict[str, Any]) -> EmailTemplate:
        ...

    async def update_email_template(self, template_id: str, updates: dict[str, Any]) -> EmailTemplate:
        ...

    async def delete_email_template(self, template_id: str) -> None:
        ...

    async def list_scheduled_emails(self) -> list[ScheduledEmail]:
        ...

    async def create_scheduled_email(self, data: dict[str, Any]) -> ScheduledEmail:
        ...

    async def update_scheduled_email_status(
        self, scheduled_email_id: str, status: ScheduledEmailStatus
    ) -> ScheduledEmail:
        ...

    # -- FAQ sets ------------------------------------------------------------

    async def list_faq_sets(self) -> list[FAQSet]:
        ...

    async def create_faq_set(self, data: dict[str, Any]) -> FAQSet:
        ...

    async def update_faq_set(self, set_id: str, updates: dict[str, Any]) -> FAQSet:
        ...

    async def delete_faq_set(self, set_id: str) -> None:
        ...

    async def create_faq_notifications(
        self, set_id: str, client_ids: list[str]
    ) -> list[FAQNotification]:
        ...

    # -- Custom forms --------------------------------------------------------

    async def list_custom_forms(self) -> list[CustomForm]:
        ...

    async def create_custom_form(self, data: dict[str, Any]) -> CustomForm:
        ...

    async def update_custom_form(self, form_id: str, updates: dict[str, Any]) -> CustomForm:
        ...

    async def delete_custom_form(self, form_id: str) -> None:
        ...

    async def list_form_requests(self) -> list[FormRequest]:
        ...

    async def create_form_requests(self, form_id: str, client_ids: list[str]) -> list[FormRequest]:
        ...

    async def update_form_request_status(
        self, request_id: str, status: FormRequestStatus
    ) -> FormRequest:
        ...

    # -- Meetings ------------------------------------------------------------

    async def list_meetings(self) -> list[Meeting]:
        ...

    async def create_meeting(self, data: dict[str, Any]) -> Meeting:
        ...

    async def list_availability_slots(self) -> list[AvailabilitySlot]:
        ...

    async def create_availability_slot(self, data: dict[str, Any]) -> AvailabilitySlot:
        ...

    async def update_availability_slot(
        self, slot_id: str, updates: dict[str, Any]
    ) -> AvailabilitySlot:
        ...

    async def get_integration_settings(self) -> IntegrationSettings:
        ...

    async def update_integration_settings(
        self, settings: IntegrationSettings
    ) -> IntegrationSettings:
        ...
