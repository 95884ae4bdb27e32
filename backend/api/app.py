"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import PortalError
from shared.log_config import setup_logging
from modules.admin.routes import router as admin_router
from modules.clients.routes import router as clients_router
from modules.custom_forms.routes import router as custom_forms_router
from modules.emails.routes import router as emails_router
from modules.faqs.routes import router as faqs_router
from modules.forms.routes import router as forms_router
from modules.identity.routes import navigation_router, router as identity_router
from modules.meetings.routes import router as meetings_router

from .dependencies import get_container
from .models.errors import ErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)


def status_for_error(exc: PortalError) -> int:
    """HTTP status for a domain error."""
    return exc.status_code


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} ({exc.code})")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_exception(exc).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    if not settings.backend_configured:
        logger.warning("Supabase is not configured; running in demo mode")
    yield
    # Shutdown: pending autosaves are dropped with their stores
    get_container().reset()
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Wedding details intake portal and photographer admin console",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(PortalError, portal_error_handler)

    # Public and client routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(identity_router, prefix="/api/auth", tags=["auth"])
    app.include_router(navigation_router, prefix="/api/navigation", tags=["navigation"])
    app.include_router(forms_router, prefix="/api/form", tags=["form"])

    # Admin console
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(clients_router, prefix="/api/admin/clients", tags=["admin-clients"])
    app.include_router(emails_router, prefix="/api/admin/emails", tags=["admin-emails"])
    app.include_router(faqs_router, prefix="/api/admin/faqs", tags=["admin-faqs"])
    app.include_router(custom_forms_router, prefix="/api/admin/forms", tags=["admin-forms"])
    app.include_router(meetings_router, prefix="/api/admin/meetings", tags=["admin-meetings"])

    return app


# Application instance for uvicorn
app = create_app()
