"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Long-lived pieces (the autosave scheduler, the per-user
form stores, the auth backend) live on the container; gateways and the
services built on them are request-scoped because they carry the
caller's access token.
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends

from modules.persistence.interfaces import IPersistenceBackend
from shared.config import get_settings
from shared.models import AuthenticatedUser
from .middleware.auth import get_current_user

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin.service import AdminDashboardService
    from modules.clients.service import ClientService
    from modules.custom_forms.service import CustomFormService
    from modules.emails.dispatcher import IEmailDispatcher
    from modules.emails.service import EmailService
    from modules.faqs.service import FAQService
    from modules.forms.registry import FormStoreRegistry
    from modules.forms.scheduler import Scheduler
    from modules.identity.interfaces import IAuthBackend
    from modules.identity.service import SessionProvider
    from modules.meetings.service import MeetingService


class ServiceContainer:
    """
    Container for app-session scoped instances.

    Instances are created lazily on first access and cached. Use reset()
    to clear them for testing.
    """

    def __init__(self) -> None:
        self._scheduler: "Scheduler | None" = None
        self._form_registry: "FormStoreRegistry | None" = None
        self._auth_backend: "IAuthBackend | None" = None
        self._auth_resolved = False
        self._dispatcher: "IEmailDispatcher | None" = None

    @property
    def scheduler(self) -> "Scheduler":
        """Get the autosave scheduler."""
        if self._scheduler is None:
            from modules.forms.scheduler import AsyncioScheduler
            self._scheduler = AsyncioScheduler()
        return self._scheduler

    @property
    def form_registry(self) -> "FormStoreRegistry":
        """Get the per-user form store registry."""
        if self._form_registry is None:
            from modules.forms.registry import FormStoreRegistry
            settings = get_settings()
            self._form_registry = FormStoreRegistry(
                self.scheduler,
                debounce_seconds=settings.autosave_debounce_seconds,
                idle_seconds=settings.form_store_idle_seconds,
            )
        return self._form_registry

    @property
    def auth_backend(self) -> "Optional[IAuthBackend]":
        """Get the auth backend (None in demo mode)."""
        if not self._auth_resolved:
            from modules.identity.service import get_auth_backend
            self._auth_backend = get_auth_backend()
            self._auth_resolved = True
        return self._auth_backend

    @property
    def email_dispatcher(self) -> "IEmailDispatcher":
        """Get the email dispatcher."""
        if self._dispatcher is None:
            from modules.emails.dispatcher import LoggingEmailDispatcher
            self._dispatcher = LoggingEmailDispatcher(
                demo=not get_settings().backend_configured
            )
        return self._dispatcher

    def reset(self) -> None:
        """
        Reset all cached instances.

        Pending autosaves of existing form stores are cancelled.
        """
        if self._form_registry is not None:
            self._form_registry.clear()
        self._scheduler = None
        self._form_registry = None
        self._auth_backend = None
        self._auth_resolved = False
        self._dispatcher = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    Primarily used for testing.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_gateway(
    user: AuthenticatedUser = Depends(get_current_user),
) -> IPersistenceBackend:
    """
    FastAPI dependency for the caller's persistence gateway.

    Real users get a Supabase backend running under their own token, so
    row-level security applies to everything they touch.
    """
    from modules.persistence.factory import get_demo_backend, get_persistence_backend

    if user.is_demo:
        return get_demo_backend()
    return get_persistence_backend(access_token=user.access_token)


def get_form_registry() -> "FormStoreRegistry":
    """FastAPI dependency for the form store registry."""
    return get_container().form_registry


def get_session_provider() -> "SessionProvider":
    """FastAPI dependency for a fresh session provider."""
    from modules.identity.service import SessionProvider
    from modules.persistence.factory import get_persistence_backend

    return SessionProvider(
        get_container().auth_backend,
        lambda token: get_persistence_backend(access_token=token),
        demo_role=get_settings().demo_role,
    )


def get_client_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "ClientService":
    """FastAPI dependency for client management."""
    from modules.clients.service import ClientService
    return ClientService(gateway)


def get_email_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "EmailService":
    """FastAPI dependency for email management."""
    from modules.emails.service import EmailService
    return EmailService(gateway, get_container().email_dispatcher)


def get_faq_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "FAQService":
    """FastAPI dependency for FAQ management."""
    from modules.faqs.service import FAQService
    return FAQService(gateway)


def get_custom_form_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "CustomFormService":
    """FastAPI dependency for the custom form builder."""
    from modules.custom_forms.service import CustomFormService
    return CustomFormService(gateway)


def get_meeting_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "MeetingService":
    """FastAPI dependency for meeting scheduling."""
    from modules.meetings.service import MeetingService
    return MeetingService(gateway)


def get_admin_dashboard_service(
    gateway: IPersistenceBackend = Depends(get_gateway),
) -> "AdminDashboardService":
    """FastAPI dependency for admin dashboard statistics."""
    from modules.admin.service import AdminDashboardService
    return AdminDashboardService(gateway)
