"""
In-memory persistence backend for demo mode.

Used whenever Supabase is not configured. Reads return fixed sample data;
writes echo back what a real backend would have returned but never change
later reads, so every call is deterministic and free of side effects.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from .exceptions import RecordNotFoundError
from .models import (
    AvailabilitySlot,
    ClientRecord,
    CustomForm,
    CustomFormField,
    EmailTemplate,
    FAQItem,
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

FIXTURE_TIMESTAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)

DEMO_FORM_DATA: dict[str, str] = {
    "bride_name": "Sarah",
    "groom_name": "Michael",
    "wedding_date": "2024-07-15",
    "venue_name": "Thornton Manor",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryBackend:
    """
    Deterministic stand-in for the Supabase backend.

    Args:
        clock: Source of "now" for fixtures that are relative to the
            current time (upcoming meetings, today's slots).
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utc_now

    @property
    def is_demo(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        for client in self._clients():
            if client.id == user_id:
                return UserProfile(**client.model_dump(exclude={"wedding_form"}))
        return None

    async def create_profile(self, data: dict[str, Any]) -> UserProfile:
        logger.warning("Demo mode: profile not persisted")
        return UserProfile(**{"id": "mock-new-client", "created_at": self._clock(), **data})

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        logger.warning("Demo mode: profile update not persisted")
        current = await self.get_profile(user_id)
        if current is None:
            raise RecordNotFoundError("profile", user_id)
        return UserProfile(**{**current.model_dump(), **updates, "id": user_id})

    async def delete_profile(self, user_id: str) -> None:
        logger.warning("Demo mode: profile deletion not persisted")

    async def list_clients(self) -> list[ClientRecord]:
        return self._clients()

    # -------------------------------------------------------------------------
    # Wedding forms
    # -------------------------------------------------------------------------

    async def get_wedding_form(self, user_id: str) -> Optional[WeddingForm]:
        """Always the same sample record, whoever asks."""
        return WeddingForm(
            id="mock-id",
            user_id=user_id,
            form_data=dict(DEMO_FORM_DATA),
            updated_at=FIXTURE_TIMESTAMP,
        )

    async def save_wedding_form(self, user_id: str, form_data: FieldMap) -> WeddingForm:
        logger.warning("Demo mode: wedding form not persisted")
        return WeddingForm(
            id="mock-id",
            user_id=user_id,
            form_data=dict(form_data),
            updated_at=self._clock(),
        )

    # -------------------------------------------------------------------------
    # Email templates and scheduled emails
    # -------------------------------------------------------------------------

    async def list_email_templates(self) -> list[EmailTemplate]:
        return [
            EmailTemplate(
                id="1",
                name="Wedding Form Reminder",
                subject="Complete Your Wedding Form - {{bride_name}} & {{groom_name}}",
                template=(
                    "Dear {{bride_name}} and {{groom_name}},\n\n"
                    "We hope you're excited for your upcoming wedding on {{wedding_date}}!\n\n"
                    "Please complete your wedding form at your earliest convenience.\n\n"
                    "Best regards,\n{{photographer_name}}"
                ),
                type="reminder",
                created_at=FIXTURE_TIMESTAMP,
            ),
            EmailTemplate(
                id="2",
                name="Welcome Email",
                subject="Welcome to {{company_name}}!",
                template=(
                    "Dear {{bride_name}} and {{groom_name}},\n\n"
                    "Welcome to {{company_name}}! We're thrilled to be part of your special day.\n\n"
                    "Best regards,\n{{photographer_name}}"
                ),
                type="welcome",
                created_at=FIXTURE_TIMESTAMP,
            ),
        ]

    async def get_email_template(self, template_id: str) -> EmailTemplate:
        for template in await self.list_email_templates():
            if template.id == template_id:
                return template
        raise RecordNotFoundError("email_template", template_id)

    async def create_email_template(self, data: dict[str, Any]) -> EmailTemplate:
        logger.warning("Demo mode: email template not persisted")
        return EmailTemplate(**{**data, "id": "mock-template-id", "created_at": self._clock()})

    async def update_email_template(self, template_id: str, updates: dict[str, Any]) -> EmailTemplate:
        logger.warning("Demo mode: email template update not persisted")
        current = await self.get_email_template(template_id)
        return EmailTemplate(**{**current.model_dump(), **updates, "id": template_id})

    async def delete_email_template(self, template_id: str) -> None:
        logger.warning("Demo mode: email template deletion not persisted")

    async def list_scheduled_emails(self) -> list[ScheduledEmail]:
        return [
            ScheduledEmail(
                id="1",
                template_id="1",
                template_name="Wedding Form Reminder",
                client_ids=["mock-client-1", "mock-client-2", "mock-client-3"],
                recipient_count=3,
                scheduled_for=self._clock() + timedelta(days=1),
                status=ScheduledEmailStatus.SCHEDULED,
            )
        ]

    async def create_scheduled_email(self, data: dict[str, Any]) -> ScheduledEmail:
        logger.warning("Demo mode: scheduled email not persisted")
        client_ids = list(data.get("client_ids") or [])
        return ScheduledEmail(
            **{
                "recipient_count": len(client_ids),
                **data,
                "id": "mock-scheduled-email",
                "client_ids": client_ids,
            }
        )

    async def update_scheduled_email_status(
        self, scheduled_email_id: str, status: ScheduledEmailStatus
    ) -> ScheduledEmail:
        logger.warning("Demo mode: scheduled email status not persisted")
        for email in await self.list_scheduled_emails():
            if email.id == scheduled_email_id:
                return email.model_copy(update={"status": status})
        raise RecordNotFoundError("scheduled_email", scheduled_email_id)

    # -------------------------------------------------------------------------
    # FAQ sets
    # -------------------------------------------------------------------------

    async def list_faq_sets(self) -> list[FAQSet]:
        return [
            FAQSet(
                id="1",
                name="Wedding Day Timeline",
                description="Common questions about wedding day scheduling",
                category="timeline",
                faqs=[
                    FAQItem(
                        question="What time should we start getting ready?",
                        answer=(
                            "We recommend starting 2-3 hours before the ceremony "
                            "for optimal photo opportunities."
                        ),
                    ),
                    FAQItem(
                        question="How long do group photos take?",
                        answer=(
                            "Group photos typically take 20-30 minutes, depending on "
                            "the size of your families and bridal party."
                        ),
                    ),
                ],
                created_at=FIXTURE_TIMESTAMP,
            ),
            FAQSet(
                id="2",
                name="Photography Preparation",
                description="Tips for preparing for your photography session",
                category="photography",
                faqs=[
                    FAQItem(
                        question="What should we wear for engagement photos?",
                        answer=(
                            "We recommend coordinating colors and avoiding busy patterns. "
                            "Solid colors and textures work beautifully."
                        ),
                    )
                ],
                created_at=FIXTURE_TIMESTAMP,
            ),
        ]

    async def create_faq_set(self, data: dict[str, Any]) -> FAQSet:
        logger.warning("Demo mode: FAQ set not persisted")
        return FAQSet(**{**data, "id": "mock-faq-set", "created_at": self._clock()})

    async def update_faq_set(self, set_id: str, updates: dict[str, Any]) -> FAQSet:
        logger.warning("Demo mode: FAQ set update not persisted")
        for faq_set in await self.list_faq_sets():
            if faq_set.id == set_id:
                return FAQSet(**{**faq_set.model_dump(), **updates, "id": set_id})
        raise RecordNotFoundError("faq_set", set_id)

    async def delete_faq_set(self, set_id: str) -> None:
        logger.warning("Demo mode: FAQ set deletion not persisted")

    async def create_faq_notifications(
        self, set_id: str, client_ids: list[str]
    ) -> list[FAQNotification]:
        logger.warning("Demo mode: FAQ notifications not persisted")
        sent_at = self._clock()
        return [
            FAQNotification(faq_set_id=set_id, client_id=client_id, sent_at=sent_at)
            for client_id in client_ids
        ]

    # -------------------------------------------------------------------------
    # Custom forms and form requests
    # -------------------------------------------------------------------------

    async def list_custom_forms(self) -> list[CustomForm]:
        return [
            CustomForm(
                id="1",
                name="Vendor Contact Information",
                description="Collect contact details for all wedding vendors",
                category="supplier",
                fields=[
                    CustomFormField(
                        type="text",
                        label="Vendor Name",
                        placeholder="Enter vendor name",
                        required=True,
                    ),
                    CustomFormField(
                        type="email",
                        label="Vendor Email",
                        placeholder="vendor@example.com",
                        required=True,
                    ),
                    CustomFormField(
                        type="phone",
                        label="Vendor Phone",
                        placeholder="+44 123 456 7890",
                        required=False,
                    ),
                ],
                created_at=FIXTURE_TIMESTAMP,
            )
        ]

    async def create_custom_form(self, data: dict[str, Any]) -> CustomForm:
        logger.warning("Demo mode: custom form not persisted")
        return CustomForm(**{**data, "id": "mock-form-id", "created_at": self._clock()})

    async def update_custom_form(self, form_id: str, updates: dict[str, Any]) -> CustomForm:
        logger.warning("Demo mode: custom form update not persisted")
        for form in await self.list_custom_forms():
            if form.id == form_id:
                return CustomForm(**{**form.model_dump(), **updates, "id": form_id})
        raise RecordNotFoundError("custom_form", form_id)

    async def delete_custom_form(self, form_id: str) -> None:
        logger.warning("Demo mode: custom form deletion not persisted")

    async def list_form_requests(self) -> list[FormRequest]:
        now = self._clock()
        return [
            FormRequest(
                id="1",
                form_id="1",
                client_id="mock-client-1",
                form_name="Vendor Contact Information",
                client_name="Sarah Johnson",
                status=FormRequestStatus.PENDING,
                sent_at=now,
            ),
            FormRequest(
                id="2",
                form_id="1",
                client_id="mock-client-2",
                form_name="Vendor Contact Information",
                client_name="Emma Wilson",
                status=FormRequestStatus.COMPLETED,
                sent_at=now - timedelta(days=1),
            ),
        ]

    async def create_form_requests(self, form_id: str, client_ids: list[str]) -> list[FormRequest]:
        logger.warning("Demo mode: form requests not persisted")
        sent_at = self._clock()
        return [
            FormRequest(
                id=f"mock-request-{index}",
                form_id=form_id,
                client_id=client_id,
                status=FormRequestStatus.PENDING,
                sent_at=sent_at,
            )
            for index, client_id in enumerate(client_ids, start=1)
        ]

    async def update_form_request_status(
        self, request_id: str, status: FormRequestStatus
    ) -> FormRequest:
        logger.warning("Demo mode: form request status not persisted")
        for request in await self.list_form_requests():
            if request.id == request_id:
                return request.model_copy(update={"status": status})
        raise RecordNotFoundError("form_request", request_id)

    # -------------------------------------------------------------------------
    # Meetings, availability and integration settings
    # -------------------------------------------------------------------------

    async def list_meetings(self) -> list[Meeting]:
        now = self._clock()
        return [
            Meeting(
                id="1",
                client_id="mock-client-1",
                client_name="Sarah & Michael",
                meeting_type="consultation",
                scheduled_for=now + timedelta(days=2),
                meet_id="abc-def-ghi",
            ),
            Meeting(
                id="2",
                client_id="mock-client-2",
                client_name="Emma & James",
                meeting_type="planning",
                scheduled_for=now + timedelta(days=5),
                meet_id="xyz-uvw-rst",
            ),
        ]

    async def create_meeting(self, data: dict[str, Any]) -> Meeting:
        logger.warning("Demo mode: meeting not persisted")
        return Meeting(**{**data, "id": "mock-meeting-id"})

    async def list_availability_slots(self) -> list[AvailabilitySlot]:
        today = self._clock().date()
        return [
            AvailabilitySlot(
                id="1",
                date=today,
                start_time="10:00",
                end_time="11:00",
                duration=60,
                meeting_type="consultation",
                is_booked=False,
            ),
            AvailabilitySlot(
                id="2",
                date=today + timedelta(days=1),
                start_time="14:00",
                end_time="15:00",
                duration=60,
                meeting_type="consultation",
                is_booked=True,
            ),
        ]

    async def create_availability_slot(self, data: dict[str, Any]) -> AvailabilitySlot:
        logger.warning("Demo mode: availability slot not persisted")
        return AvailabilitySlot(**{**data, "id": "mock-slot-id"})

    async def update_availability_slot(
        self, slot_id: str, updates: dict[str, Any]
    ) -> AvailabilitySlot:
        logger.warning("Demo mode: availability slot update not persisted")
        for slot in await self.list_availability_slots():
            if slot.id == slot_id:
                return AvailabilitySlot(**{**slot.model_dump(), **updates, "id": slot_id})
        raise RecordNotFoundError("availability_slot", slot_id)

    async def get_integration_settings(self) -> IntegrationSettings:
        return IntegrationSettings()

    async def update_integration_settings(
        self, settings: IntegrationSettings
    ) -> IntegrationSettings:
        logger.warning("Demo mode: integration settings not persisted")
        return settings

    # -------------------------------------------------------------------------
    # Fixtures
    # -------------------------------------------------------------------------

    def _clients(self) -> list[ClientRecord]:
        return [
            ClientRecord(
                id="mock-client-1",
                email="sarah.johnson@example.com",
                full_name="Sarah Johnson",
                phone="+44 123 456 7890",
                role=UserRole.CLIENT,
                created_at=FIXTURE_TIMESTAMP,
                wedding_form=WeddingForm(
                    user_id="mock-client-1",
                    form_data={
                        "bride_name": "Sarah",
                        "groom_name": "Michael",
                        "wedding_date": "2024-07-15",
                        "venue_name": "Thornton Manor",
                        "contact_phone": "+44 123 456 7890",
                    },
                    updated_at=FIXTURE_TIMESTAMP,
                ),
            ),
            ClientRecord(
                id="mock-client-2",
                email="emma.wilson@example.com",
                full_name="Emma Wilson",
                phone="+44 123 456 7891",
                role=UserRole.CLIENT,
                created_at=FIXTURE_TIMESTAMP,
                wedding_form=WeddingForm(
                    user_id="mock-client-2",
                    form_data={
                        "bride_name": "Emma",
                        "groom_name": "James",
                        "wedding_date": "2024-09-20",
                        "venue_name": "Cheshire Manor",
                        "contact_phone": "+44 123 456 7891",
                    },
                    updated_at=FIXTURE_TIMESTAMP,
                ),
            ),
        ]
