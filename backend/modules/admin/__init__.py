"""Admin dashboard statistics."""

from .models import DashboardStats
from .service import AdminDashboardService

__all__ = ["DashboardStats", "AdminDashboardService"]
