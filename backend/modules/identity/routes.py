"""
Auth and navigation endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_form_registry, get_session_provider
from api.middleware.auth import get_bearer_token, get_optional_user
from modules.forms.registry import FormStoreRegistry
from shared.models import AuthenticatedUser

from .exceptions import EmailConfirmationRequiredError, InvalidCredentialsError
from .guards import resolve_route
from .models import RouteDecision, SessionResponse, SignInRequest, SignUpRequest
from .service import SessionProvider

router = APIRouter()
navigation_router = APIRouter()


@router.get("/session", response_model=SessionResponse)
async def get_session(
    token: Optional[str] = Depends(get_bearer_token),
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """
    Resolve the caller's session.

    Never fails: an invalid or missing token is reported as unauthenticated.
    """
    return SessionResponse.from_snapshot(await provider.start(token))


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """Sign in with email and password."""
    try:
        snapshot = await provider.sign_in(request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    return SessionResponse.from_snapshot(snapshot, provider.refresh_token)


@router.post("/sign-up", response_model=SessionResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """
    Create an account and sign in.

    Returns 202 when the account exists but must be confirmed by email.
    """
    try:
        snapshot = await provider.sign_up(request.email, request.password, request.full_name)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EmailConfirmationRequiredError:
        response.status_code = status.HTTP_202_ACCEPTED
        return SessionResponse.from_snapshot(provider.snapshot)
    return SessionResponse.from_snapshot(snapshot, provider.refresh_token)


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    provider: SessionProvider = Depends(get_session_provider),
    registry: FormStoreRegistry = Depends(get_form_registry),
) -> SessionResponse:
    """
    End the session and drop the caller's form store.

    Edits still waiting for their autosave are discarded.
    """
    await provider.start(token)
    snapshot = await provider.sign_out()
    if user is not None:
        registry.drop(user.id)
    return SessionResponse.from_snapshot(snapshot)


@navigation_router.get("/resolve", response_model=RouteDecision)
async def resolve_navigation(
    path: str = Query(..., description="Logical route, e.g. /admin/clients"),
    token: Optional[str] = Depends(get_bearer_token),
    provider: SessionProvider = Depends(get_session_provider),
) -> RouteDecision:
    """Whether the caller may open a frontend route, and where to go if not."""
    snapshot = await provider.start(token)
    return resolve_route(path, snapshot)
