from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from staffqueue.engine.eligibility import staff_with_load
from staffqueue.schemas.dashboard import DashboardRequest, DashboardResponse
from staffqueue.services.base import OwnerScopedService
from staffqueue.services.ports import SnapshotProvider

logger = logging.getLogger(__name__)


class DashboardService(OwnerScopedService):
    """Daily overview: bookings, queue length, per-staff load and recent activity."""

    def __init__(
        self,
        provider: SnapshotProvider,
        *,
        default_owner_id: str,
        clock: Callable[[], date] = date.today,
        recent_activity_limit: int = 10,
    ) -> None:
        super().__init__(provider, default_owner_id=default_owner_id, clock=clock)
        self._recent_activity_limit = recent_activity_limit

    async def summary(self, request: DashboardRequest) -> DashboardResponse:
        owner_id = self._owner(request.owner_id)
        target_date = request.date or self._today()
        logger.info("Building dashboard for owner %s on %s", owner_id, target_date)

        snapshot = await self._provider.load_snapshot(owner_id)
        on_date = [
            appointment
            for appointment in snapshot.appointments
            if appointment.appointment_date == target_date and appointment.status != "Cancelled"
        ]
        activity = await self._provider.recent_activity(owner_id, self._recent_activity_limit)

        return DashboardResponse(
            date=target_date,
            total_appointments=len(on_date),
            completed=sum(1 for item in on_date if item.status == "Completed"),
            pending=sum(1 for item in on_date if item.status == "Scheduled"),
            queue_length=sum(1 for item in snapshot.appointments if item.in_queue),
            staff_loads=staff_with_load(snapshot.staff, snapshot.appointments, target_date),
            recent_activity=activity,
        )
