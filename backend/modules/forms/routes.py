"""
Wedding form API endpoints.

Every endpoint works on the caller's own form through their FormStateStore.
Field updates return immediately with the optimistic state; persistence
happens in the background once edits go quiet.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_form_registry, get_gateway
from api.middleware.auth import get_current_user
from modules.persistence.interfaces import IPersistenceBackend
from shared.models import AuthenticatedUser

from .exceptions import FormSaveFailedError
from .dashboard import days_until_wedding, generate_wedding_timeline, get_motivational_message
from .models import (
    DashboardResponse,
    FormStateResponse,
    SaveResponse,
    SectionView,
    UpdateFieldRequest,
    UpdateSectionRequest,
)
from .registry import FormStoreRegistry
from .sections import SECTIONS, get_adjacent_sections, resolve_section_index
from .store import FormStateStore

router = APIRouter()


async def get_form_store(
    user: AuthenticatedUser = Depends(get_current_user),
    gateway: IPersistenceBackend = Depends(get_gateway),
    registry: FormStoreRegistry = Depends(get_form_registry),
) -> FormStateStore:
    """The caller's form store, loaded on first use."""
    return await registry.get_store(user.id, gateway)


def _state_response(store: FormStateStore) -> FormStateResponse:
    return FormStateResponse(
        form_data=store.state,
        completion=store.completion_percentage(),
        sections=store.section_progress(),
        autosave_pending=store.autosave_pending,
        last_saved_at=store.last_saved_at,
    )


@router.get("", response_model=FormStateResponse)
async def get_form(store: FormStateStore = Depends(get_form_store)) -> FormStateResponse:
    """Get the current working copy and its completion."""
    return _state_response(store)


@router.put("/fields/{field_name}", response_model=FormStateResponse)
async def update_field(
    field_name: str,
    request: UpdateFieldRequest,
    store: FormStateStore = Depends(get_form_store),
) -> FormStateResponse:
    """Set one field. An autosave follows once edits stop."""
    store.update_field(field_name, request.value)
    return _state_response(store)


@router.patch("", response_model=FormStateResponse)
async def update_section(
    request: UpdateSectionRequest,
    store: FormStateStore = Depends(get_form_store),
) -> FormStateResponse:
    """Set several fields at once."""
    store.update_section(request.values)
    return _state_response(store)


@router.post("/save", response_model=SaveResponse)
async def save_form(store: FormStateStore = Depends(get_form_store)) -> SaveResponse:
    """
    Save now, without waiting for the autosave.

    Returns 502 when the backend did not accept the write.
    """
    if not await store.save():
        raise FormSaveFailedError(store.user_id)
    return SaveResponse(
        saved=True,
        last_saved_at=store.last_saved_at,
        completion=store.completion_percentage(),
    )


@router.post("/reset", response_model=FormStateResponse)
async def reset_form(store: FormStateStore = Depends(get_form_store)) -> FormStateResponse:
    """Discard local edits and return to empty defaults (not persisted)."""
    store.reset()
    return _state_response(store)


@router.get("/sections", response_model=list[SectionView])
async def list_sections(store: FormStateStore = Depends(get_form_store)) -> list[SectionView]:
    """All wizard steps in order."""
    return [_section_view(section.id, store) for section in SECTIONS]


@router.get("/sections/{section_id}", response_model=SectionView)
async def get_section(
    section_id: str,
    store: FormStateStore = Depends(get_form_store),
) -> SectionView:
    """
    One wizard step. Unknown section ids fall back to the first step.
    """
    return _section_view(section_id, store)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(store: FormStateStore = Depends(get_form_store)) -> DashboardResponse:
    """Client dashboard: progress, countdown and day timeline."""
    state = store.state
    completion = store.completion_percentage()
    return DashboardResponse(
        completion=completion,
        message=get_motivational_message(completion),
        celebrate=store.consume_celebration(),
        days_until_wedding=days_until_wedding(state.get("wedding_date")),
        timeline=generate_wedding_timeline(state),
        sections=store.section_progress(),
    )


def _section_view(section_id: Optional[str], store: FormStateStore) -> SectionView:
    index = resolve_section_index(section_id)
    section = SECTIONS[index]
    previous, following = get_adjacent_sections(section.id)
    state = store.state
    return SectionView(
        id=section.id,
        index=index,
        title=section.title,
        description=section.description,
        icon=section.icon,
        fields={name: state.get(name) for name in section.fields},
        previous_id=previous.id if previous else None,
        next_id=following.id if following else None,
    )
