"""
Supabase-backed persistence gateway.

Encapsulates all Supabase queries and data mapping for the portal tables:
- profiles, wedding_forms
- email_templates, scheduled_emails
- faq_sets, faq_notifications
- custom_forms, form_requests
- meetings, availability_slots, admin_settings

Note: This backend does NOT perform authorization checks. When it is
built on a user-authenticated client, row-level security decides what
each caller may read or write.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from pydantic_core import to_jsonable_python

from shared.repository import BaseRepository
from .exceptions import (
    BackendTransportError,
    PermissionDeniedError,
    RecordNotFoundError,
)
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
    UserRole,
    WeddingForm,
)

logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes
NO_ROWS_CODE = "PGRST116"
PERMISSION_DENIED_CODES = {"42501", "PGRST301", "PGRST302"}

INTEGRATION_SETTINGS_KEY = "integration_settings"


class SupabaseBackend(BaseRepository[Any]):
    """
    Live persistence backend over a Supabase client.

    All methods return Pydantic models mapped from database rows.
    """

    @property
    def is_demo(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a profile by user ID, or None when the row does not exist."""
        result = self._execute(
            self._db.table("profiles").select("*").eq("id", user_id),
            "profile",
            user_id,
        )
        row = self._first_row(result)
        return self._map_to_profile(row) if row else None

    async def create_profile(self, data: dict[str, Any]) -> UserProfile:
        result = self._execute(
            self._db.table("profiles").insert(to_jsonable_python(data)),
            "profile",
        )
        return self._map_to_profile(self._first(result, "profile"))

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        result = self._execute(
            self._db.table("profiles").update(to_jsonable_python(updates)).eq("id", user_id),
            "profile",
            user_id,
        )
        return self._map_to_profile(self._first(result, "profile", user_id))

    async def delete_profile(self, user_id: str) -> None:
        self._execute(
            self._db.table("profiles").delete().eq("id", user_id),
            "profile",
            user_id,
        )

    async def list_clients(self) -> list[ClientRecord]:
        """List client profiles with their embedded wedding form."""
        result = self._execute(
            self._db.table("profiles")
            .select("*, wedding_forms(*)")
            .eq("role", UserRole.CLIENT.value)
            .order("created_at", desc=True),
            "profile",
        )
        return [self._map_to_client(row) for row in self._rows(result)]

    # -------------------------------------------------------------------------
    # Wedding forms
    # -------------------------------------------------------------------------

    async def get_wedding_form(self, user_id: str) -> Optional[WeddingForm]:
        result = self._execute(
            self._db.table("wedding_forms").select("*").eq("user_id", user_id),
            "wedding_form",
            user_id,
        )
        row = self._first_row(result)
        return self._map_to_wedding_form(row) if row else None

    async def save_wedding_form(self, user_id: str, form_data: FieldMap) -> WeddingForm:
        """Upsert the full form on user_id."""
        data = {
            "user_id": user_id,
            "form_data": form_data,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._execute(
            self._db.table("wedding_forms").upsert(data, on_conflict="user_id"),
            "wedding_form",
            user_id,
        )
        return self._map_to_wedding_form(self._first(result, "wedding_form", user_id))

    # -------------------------------------------------------------------------
    # Email templates and scheduled emails
    # -------------------------------------------------------------------------

    async def list_email_templates(self) -> list[EmailTemplate]:
        result = self._execute(
            self._db.table("email_templates").select("*").order("created_at", desc=True),
            "email_template",
        )
        return [EmailTemplate(**row) for row in self._rows(result)]

    async def get_email_template(self, template_id: str) -> EmailTemplate:
        result = self._execute(
            self._db.table("email_templates").select("*").eq("id", template_id),
            "email_template",
            template_id,
        )
        return EmailTemplate(**self._first(result, "email_template", template_id))

    async def create_email_template(self, data: dict[str, Any]) -> EmailTemplate:
        result = self._execute(
            self._db.table("email_templates").insert(to_jsonable_python(data)),
            "email_template",
        )
        return EmailTemplate(**self._first(result, "email_template"))

    async def update_email_template(self, template_id: str, updates: dict[str, Any]) -> EmailTemplate:
        result = self._execute(
            self._db.table("email_templates")
            .update(to_jsonable_python(updates))
            .eq("id", template_id),
            "email_template",
            template_id,
        )
        return EmailTemplate(**self._first(result, "email_template", template_id))

    async def delete_email_template(self, template_id: str) -> None:
        self._execute(
            self._db.table("email_templates").delete().eq("id", template_id),
            "email_template",
            template_id,
        )

    async def list_scheduled_emails(self) -> list[ScheduledEmail]:
        result = self._execute(
            self._db.table("scheduled_emails")
            .select("*, email_templates(name)")
            .order("scheduled_for"),
            "scheduled_email",
        )
        return [self._map_to_scheduled_email(row) for row in self._rows(result)]

    async def create_scheduled_email(self, data: dict[str, Any]) -> ScheduledEmail:
        result = self._execute(
            self._db.table("scheduled_emails").insert(to_jsonable_python(data)),
            "scheduled_email",
        )
        return self._map_to_scheduled_email(self._first(result, "scheduled_email"))

    async def update_scheduled_email_status(
        self, scheduled_email_id: str, status: ScheduledEmailStatus
    ) -> ScheduledEmail:
        result = self._execute(
            self._db.table("scheduled_emails")
            .update({"status": status.value})
            .eq("id", scheduled_email_id),
            "scheduled_email",
            scheduled_email_id,
        )
        return self._map_to_scheduled_email(
            self._first(result, "scheduled_email", scheduled_email_id)
        )

    # -------------------------------------------------------------------------
    # FAQ sets
    # -------------------------------------------------------------------------

    async def list_faq_sets(self) -> list[FAQSet]:
        result = self._execute(
            self._db.table("faq_sets").select("*").order("created_at", desc=True),
            "faq_set",
        )
        return [FAQSet(**row) for row in self._rows(result)]

    async def create_faq_set(self, data: dict[str, Any]) -> FAQSet:
        result = self._execute(
            self._db.table("faq_sets").insert(to_jsonable_python(data)),
            "faq_set",
        )
        return FAQSet(**self._first(result, "faq_set"))

    async def update_faq_set(self, set_id: str, updates: dict[str, Any]) -> FAQSet:
        result = self._execute(
            self._db.table("faq_sets").update(to_jsonable_python(updates)).eq("id", set_id),
            "faq_set",
            set_id,
        )
        return FAQSet(**self._first(result, "faq_set", set_id))

    async def delete_faq_set(self, set_id: str) -> None:
        self._execute(
            self._db.table("faq_sets").delete().eq("id", set_id),
            "faq_set",
            set_id,
        )

    async def create_faq_notifications(
        self, set_id: str, client_ids: list[str]
    ) -> list[FAQNotification]:
        if not client_ids:
            return []
        sent_at = datetime.now(timezone.utc).isoformat()
        rows = [
            {"client_id": client_id, "faq_set_id": set_id, "sent_at": sent_at, "status": "sent"}
            for client_id in client_ids
        ]
        result = self._execute(
            self._db.table("faq_notifications").insert(rows),
            "faq_notification",
        )
        return [FAQNotification(**row) for row in self._rows(result)]

    # -------------------------------------------------------------------------
    # Custom forms and form requests
    # -------------------------------------------------------------------------

    async def list_custom_forms(self) -> list[CustomForm]:
        result = self._execute(
            self._db.table("custom_forms").select("*").order("created_at", desc=True),
            "custom_form",
        )
        return [CustomForm(**row) for row in self._rows(result)]

    async def create_custom_form(self, data: dict[str, Any]) -> CustomForm:
        result = self._execute(
            self._db.table("custom_forms").insert(to_jsonable_python(data)),
            "custom_form",
        )
        return CustomForm(**self._first(result, "custom_form"))

    async def update_custom_form(self, form_id: str, updates: dict[str, Any]) -> CustomForm:
        result = self._execute(
            self._db.table("custom_forms").update(to_jsonable_python(updates)).eq("id", form_id),
            "custom_form",
            form_id,
        )
        return CustomForm(**self._first(result, "custom_form", form_id))

    async def delete_custom_form(self, form_id: str) -> None:
        self._execute(
            self._db.table("custom_forms").delete().eq("id", form_id),
            "custom_form",
            form_id,
        )

    async def list_form_requests(self) -> list[FormRequest]:
        result = self._execute(
            self._db.table("form_requests")
            .select("*, custom_forms(name), profiles(full_name)")
            .order("sent_at", desc=True),
            "form_request",
        )
        return [self._map_to_form_request(row) for row in self._rows(result)]

    async def create_form_requests(self, form_id: str, client_ids: list[str]) -> list[FormRequest]:
        if not client_ids:
            return []
        sent_at = datetime.now(timezone.utc).isoformat()
        rows = [
            {
                "form_id": form_id,
                "client_id": client_id,
                "status": FormRequestStatus.PENDING.value,
                "sent_at": sent_at,
            }
            for client_id in client_ids
        ]
        result = self._execute(
            self._db.table("form_requests").insert(rows),
            "form_request",
        )
        return [self._map_to_form_request(row) for row in self._rows(result)]

    async def update_form_request_status(
        self, request_id: str, status: FormRequestStatus
    ) -> FormRequest:
        result = self._execute(
            self._db.table("form_requests").update({"status": status.value}).eq("id", request_id),
            "form_request",
            request_id,
        )
        return self._map_to_form_request(self._first(result, "form_request", request_id))

    # -------------------------------------------------------------------------
    # Meetings, availability and integration settings
    # -------------------------------------------------------------------------

    async def list_meetings(self) -> list[Meeting]:
        result = self._execute(
            self._db.table("meetings")
            .select("*, profiles(full_name, email)")
            .order("scheduled_for"),
            "meeting",
        )
        return [self._map_to_meeting(row) for row in self._rows(result)]

    async def create_meeting(self, data: dict[str, Any]) -> Meeting:
        result = self._execute(
            self._db.table("meetings").insert(to_jsonable_python(data)),
            "meeting",
        )
        return self._map_to_meeting(self._first(result, "meeting"))

    async def list_availability_slots(self) -> list[AvailabilitySlot]:
        result = self._execute(
            self._db.table("availability_slots").select("*").order("date"),
            "availability_slot",
        )
        return [AvailabilitySlot(**row) for row in self._rows(result)]

    async def create_availability_slot(self, data: dict[str, Any]) -> AvailabilitySlot:
        result = self._execute(
            self._db.table("availability_slots").insert(to_jsonable_python(data)),
            "availability_slot",
        )
        return AvailabilitySlot(**self._first(result, "availability_slot"))

    async def update_availability_slot(
        self, slot_id: str, updates: dict[str, Any]
    ) -> AvailabilitySlot:
        result = self._execute(
            self._db.table("availability_slots")
            .update(to_jsonable_python(updates))
            .eq("id", slot_id),
            "availability_slot",
            slot_id,
        )
        return AvailabilitySlot(**self._first(result, "availability_slot", slot_id))

    async def get_integration_settings(self) -> IntegrationSettings:
        """Read the integration settings row, falling back to defaults when unset."""
        result = self._execute(
            self._db.table("admin_settings")
            .select("setting_value")
            .eq("setting_key", INTEGRATION_SETTINGS_KEY),
            "admin_setting",
            INTEGRATION_SETTINGS_KEY,
        )
        row = self._first_row(result)
        if not row or not row.get("setting_value"):
            return IntegrationSettings()
        return IntegrationSettings(**row["setting_value"])

    async def update_integration_settings(
        self, settings: IntegrationSettings
    ) -> IntegrationSettings:
        self._execute(
            self._db.table("admin_settings").upsert(
                {
                    "setting_key": INTEGRATION_SETTINGS_KEY,
                    "setting_value": settings.model_dump(mode="json"),
                },
                on_conflict="setting_key",
            ),
            "admin_setting",
            INTEGRATION_SETTINGS_KEY,
        )
        return settings

    # -------------------------------------------------------------------------
    # Query execution and error classification
    # -------------------------------------------------------------------------

    def _execute(self, query: Any, resource: str, record_id: Optional[str] = None) -> Any:
        """Run a query builder, translating client errors into gateway errors."""
        try:
            return query.execute()
        except APIError as e:
            raise self._classify_api_error(e, resource, record_id) from e
        except httpx.HTTPError as e:
            logger.error(f"Transport failure talking to Supabase ({resource}): {e}")
            raise BackendTransportError(str(e), original_error=type(e).__name__) from e

    @staticmethod
    def _classify_api_error(
        error: APIError, resource: str, record_id: Optional[str]
    ) -> Exception:
        code = str(error.code or "")
        if code == NO_ROWS_CODE:
            return RecordNotFoundError(resource, record_id)
        if code in PERMISSION_DENIED_CODES:
            return PermissionDeniedError(resource, reason=error.message)
        logger.error(f"Supabase API error on {resource}: {code} {error.message}")
        return BackendTransportError(error.message or code, original_error=code)

    @classmethod
    def _first(cls, result: Any, resource: str, record_id: Optional[str] = None) -> dict[str, Any]:
        """First returned row; an empty representation means no row matched."""
        row = cls._first_row(result)
        if row is None:
            raise RecordNotFoundError(resource, record_id)
        return row

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        return UserProfile(
            id=str(data["id"]),
            email=data.get("email"),
            full_name=data.get("full_name"),
            phone=data.get("phone"),
            role=UserRole(data.get("role") or UserRole.CLIENT.value),
            created_at=data.get("created_at"),
        )

    def _map_to_wedding_form(self, data: dict[str, Any]) -> WeddingForm:
        return WeddingForm(
            id=str(data["id"]) if data.get("id") is not None else None,
            user_id=str(data["user_id"]),
            form_data=data.get("form_data") or {},
            updated_at=data.get("updated_at"),
        )

    def _map_to_client(self, data: dict[str, Any]) -> ClientRecord:
        profile = self._map_to_profile(data)
        form_row = self._embedded(data.get("wedding_forms"))
        return ClientRecord(
            **profile.model_dump(),
            wedding_form=self._map_to_wedding_form(form_row) if form_row else None,
        )

    def _map_to_scheduled_email(self, data: dict[str, Any]) -> ScheduledEmail:
        template = self._embedded(data.get("email_templates")) or {}
        client_ids = [str(c) for c in data.get("client_ids") or []]
        return ScheduledEmail(
            id=str(data["id"]),
            template_id=data.get("template_id"),
            template_name=template.get("name") or data.get("template_name"),
            client_ids=client_ids,
            recipient_count=data.get("recipient_count") or len(client_ids),
            scheduled_for=data["scheduled_for"],
            status=ScheduledEmailStatus(data.get("status") or "scheduled"),
        )

    def _map_to_form_request(self, data: dict[str, Any]) -> FormRequest:
        form = self._embedded(data.get("custom_forms")) or {}
        profile = self._embedded(data.get("profiles")) or {}
        return FormRequest(
            id=str(data["id"]),
            form_id=data.get("form_id"),
            client_id=data.get("client_id"),
            form_name=form.get("name") or data.get("form_name"),
            client_name=profile.get("full_name") or data.get("client_name"),
            status=FormRequestStatus(data.get("status") or "pending"),
            sent_at=data.get("sent_at"),
        )

    def _map_to_meeting(self, data: dict[str, Any]) -> Meeting:
        profile = self._embedded(data.get("profiles")) or {}
        return Meeting(
            id=str(data["id"]),
            client_id=data.get("client_id"),
            client_name=profile.get("full_name") or data.get("client_name"),
            meeting_type=data.get("meeting_type") or "consultation",
            scheduled_for=data["scheduled_for"],
            meet_id=data.get("meet_id"),
            zoom_link=data.get("zoom_link"),
            status=data.get("status") or "scheduled",
        )
