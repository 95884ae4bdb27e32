"""
Client management endpoints (admin only).
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from api.dependencies import get_client_service
from modules.identity.guards import require_admin
from modules.persistence.exceptions import RecordNotFoundError
from modules.persistence.models import UserProfile

from .models import ClientListResponse, ClientSummary, CreateClientRequest, UpdateClientRequest
from .service import ClientService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=ClientListResponse)
async def list_clients(
    search: Optional[str] = Query(default=None, description="Match email, name, bride or groom"),
    service: ClientService = Depends(get_client_service),
) -> ClientListResponse:
    """List clients with their form completion."""
    clients = await service.list_clients(search)
    return ClientListResponse(clients=clients, total=len(clients))


@router.get("/export", response_class=PlainTextResponse)
async def export_clients(
    search: Optional[str] = Query(default=None),
    service: ClientService = Depends(get_client_service),
) -> PlainTextResponse:
    """Download the (optionally filtered) client list as CSV."""
    return PlainTextResponse(
        await service.export_csv(search),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="clients.csv"'},
    )


@router.post("", response_model=UserProfile, status_code=201)
async def add_client(
    request: CreateClientRequest,
    service: ClientService = Depends(get_client_service),
) -> UserProfile:
    """Add a client, with an initial wedding form if details were given."""
    return await service.add_client(request)


@router.get("/{client_id}", response_model=ClientSummary)
async def get_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
) -> ClientSummary:
    try:
        return await service.get_client(client_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")


@router.patch("/{client_id}", response_model=UserProfile)
async def update_client(
    client_id: str,
    request: UpdateClientRequest,
    service: ClientService = Depends(get_client_service),
) -> UserProfile:
    """Update a client's profile (including role)."""
    try:
        return await service.update_client(client_id, request)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Delete a client and their wedding form."""
    await service.delete_client(client_id)
