"""
Admin dashboard endpoint.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_admin_dashboard_service
from modules.identity.guards import require_admin

from .models import DashboardStats
from .service import AdminDashboardService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    service: AdminDashboardService = Depends(get_admin_dashboard_service),
) -> DashboardStats:
    """Client, form, meeting and email totals."""
    return await service.get_stats()
