from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List

from staffqueue.engine.cascade import cascade_removal
from staffqueue.engine.eligibility import staff_with_load
from staffqueue.engine.queue import drain_queue
from staffqueue.schemas.entities import Appointment, StaffMember
from staffqueue.schemas.snapshot import ChangeSet, Snapshot
from staffqueue.schemas.staff import (
    StaffAvailabilityRequest,
    StaffChangeResponse,
    StaffCreateRequest,
    StaffDeleteRequest,
    StaffListRequest,
    StaffListResponse,
    StaffTypesResponse,
    StaffUpdateRequest,
)
from staffqueue.services.base import OwnerScopedService
from staffqueue.services.ports import SnapshotProvider

logger = logging.getLogger(__name__)


class StaffService(OwnerScopedService):
    """Manage staff members and push their departures through the queue."""

    def __init__(
        self,
        provider: SnapshotProvider,
        *,
        default_owner_id: str,
        clock: Callable[[], date] = date.today,
        auto_drain_queue: bool = True,
    ) -> None:
        super().__init__(provider, default_owner_id=default_owner_id, clock=clock)
        self._auto_drain_queue = auto_drain_queue

    async def create(self, request: StaffCreateRequest) -> StaffChangeResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Creating staff member %s", request.name)
        member = StaffMember(
            id=self._provider.new_id("STF"),
            owner_id=owner_id,
            name=request.name,
            service_type=request.service_type,
            daily_capacity=request.daily_capacity,
            availability_status=request.availability_status,
        )
        description = f'Staff member "{member.name}" created'
        await self._provider.commit(
            owner_id,
            ChangeSet(
                staff=[member],
                activity=[self._activity(owner_id, "staff_created", description)],
            ),
        )
        return StaffChangeResponse(staff=member, description=description)

    async def update(self, request: StaffUpdateRequest) -> StaffChangeResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Updating staff member %s", request.staff_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_staff(snapshot, request.staff_id)

        updates = request.model_dump(
            include={"name", "service_type", "daily_capacity", "availability_status"},
            exclude_none=True,
        )
        updated = existing.model_copy(update=updates)
        changes = ChangeSet(staff=[updated])
        requeued, assigned = self._availability_effects(snapshot, existing, updated, changes)

        description = f'Staff member "{updated.name}" updated'
        changes.activity.append(self._activity(owner_id, "staff_updated", description))
        await self._provider.commit(owner_id, changes)
        return StaffChangeResponse(
            staff=updated,
            requeued=requeued,
            assigned=assigned,
            description=description,
        )

    async def delete(self, request: StaffDeleteRequest) -> StaffChangeResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Deleting staff member %s", request.staff_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_staff(snapshot, request.staff_id)

        changes = ChangeSet(deleted_staff_ids=[existing.id])
        requeued = self._requeue_upcoming(snapshot, existing.id, changes)

        description = f'Staff member "{existing.name}" deleted'
        if requeued:
            description = f"{description} (appointments moved to queue)"
        changes.activity.append(self._activity(owner_id, "staff_deleted", description))
        await self._provider.commit(owner_id, changes)
        logger.info(description)
        return StaffChangeResponse(
            staff=existing,
            requeued=requeued,
            description=description,
        )

    async def set_availability(self, request: StaffAvailabilityRequest) -> StaffChangeResponse:
        owner_id = self._owner(request.owner_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_staff(snapshot, request.staff_id)

        status = request.availability_status
        if status is None:
            status = "On Leave" if existing.availability_status == "Available" else "Available"
        logger.info("Setting staff member %s to %s", existing.id, status)

        updated = existing.model_copy(update={"availability_status": status})
        changes = ChangeSet(staff=[updated])
        requeued, assigned = self._availability_effects(snapshot, existing, updated, changes)

        description = f"{existing.name} status changed to {status}"
        changes.activity.append(
            self._activity(owner_id, "staff_availability_changed", description)
        )
        await self._provider.commit(owner_id, changes)
        return StaffChangeResponse(
            staff=updated,
            requeued=requeued,
            assigned=assigned,
            description=description,
        )

    def _requeue_upcoming(self, snapshot: Snapshot, staff_id: str, changes: ChangeSet) -> List[Appointment]:
        """Move the staff member's upcoming bookings to the queue and log the move."""

        cascade = cascade_removal(snapshot.appointments, staff_id, self._today())
        if not cascade.to_requeue:
            return []
        changes.upsert_appointments(cascade.to_requeue)
        changes.activity.append(
            self._activity(snapshot.owner_id, "appointment_queued", cascade.description)
        )
        return cascade.to_requeue

    def _availability_effects(
        self,
        snapshot: Snapshot,
        before: StaffMember,
        after: StaffMember,
        changes: ChangeSet,
    ) -> tuple[List[Appointment], List[Appointment]]:
        """Requeue on leave, drain the queue on return; adds the records to ``changes``."""

        if before.availability_status == after.availability_status:
            return [], []

        if after.availability_status == "On Leave":
            return self._requeue_upcoming(snapshot, after.id, changes), []

        if not self._auto_drain_queue:
            return [], []

        staff = [after if member.id == after.id else member for member in snapshot.staff]
        drained = drain_queue(snapshot.appointments, staff, snapshot.services, self._today())
        changes.upsert_appointments(drained.changed)
        changes.activity.extend(
            self._activity(snapshot.owner_id, "queue_assigned", description, appointment.id)
            for appointment, description in zip(drained.assigned, drained.descriptions)
        )
        return [], drained.assigned

    async def list_with_load(self, request: StaffListRequest) -> StaffListResponse:
        owner_id = self._owner(request.owner_id)
        target_date = request.date or self._today()
        snapshot = await self._provider.load_snapshot(owner_id)
        return StaffListResponse(
            date=target_date,
            items=staff_with_load(snapshot.staff, snapshot.appointments, target_date),
        )

    async def known_types(self, owner_id: str | None = None) -> StaffTypesResponse:
        """Skill labels used by staff or required by services, for suggestions."""

        snapshot = await self._provider.load_snapshot(self._owner(owner_id))
        types = {member.service_type for member in snapshot.staff}
        types.update(service.required_staff_type for service in snapshot.services)
        return StaffTypesResponse(types=sorted(types))
