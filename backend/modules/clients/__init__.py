"""
Client management module.

Public API:
- ClientService: List, search, add, edit, delete and export clients
- generate_csv / clients_to_csv: CSV export
"""

from .models import (
    ClientSummary,
    ClientListResponse,
    CreateClientRequest,
    UpdateClientRequest,
)
from .export import CLIENT_EXPORT_COLUMNS, generate_csv, clients_to_csv
from .service import ClientService, matches_search

__all__ = [
    "ClientSummary",
    "ClientListResponse",
    "CreateClientRequest",
    "UpdateClientRequest",
    "CLIENT_EXPORT_COLUMNS",
    "generate_csv",
    "clients_to_csv",
    "ClientService",
    "matches_search",
]
