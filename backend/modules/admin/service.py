"""
Admin dashboard statistics.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable

from modules.forms.completion import calculate_completion_percentage
from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import ScheduledEmailStatus

from .models import DashboardStats


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdminDashboardService:
    def __init__(
        self,
        gateway: IPersistenceBackend,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._gateway = gateway
        self._clock = clock

    async def get_stats(self) -> DashboardStats:
        clients, meetings, emails = await asyncio.gather(
            self._gateway.list_clients(),
            self._gateway.list_meetings(),
            self._gateway.list_scheduled_emails(),
        )
        now = self._clock()

        def is_upcoming(scheduled_for: datetime) -> bool:
            if scheduled_for.tzinfo is None:
                scheduled_for = scheduled_for.replace(tzinfo=timezone.utc)
            return scheduled_for >= now

        return DashboardStats(
            total_clients=len(clients),
            completed_forms=sum(
                1 for c in clients if calculate_completion_percentage(c.form_data) == 100
            ),
            upcoming_meetings=sum(1 for m in meetings if is_upcoming(m.scheduled_for)),
            pending_emails=sum(1 for e in emails if e.status == ScheduledEmailStatus.SCHEDULED),
        )
