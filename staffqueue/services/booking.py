from __future__ import annotations

import logging
from typing import List

from staffqueue.engine.assignment import resolve_assignment
from staffqueue.engine.conflicts import find_conflict
from staffqueue.engine.eligibility import explicit_choice_warnings
from staffqueue.engine.queue import assign_from_queue, dequeue, drain_queue, queued_in_order
from staffqueue.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentDeleteRequest,
    AppointmentDeleteResponse,
    AppointmentListRequest,
    AppointmentListResponse,
    AppointmentResult,
    AppointmentStatusRequest,
    AppointmentUpdateRequest,
    ConflictCheckRequest,
    ConflictCheckResponse,
)
from staffqueue.schemas.decisions import AssignmentDecision
from staffqueue.schemas.entities import Appointment
from staffqueue.schemas.queue import (
    QueueAssignRequest,
    QueueAssignResponse,
    QueueDrainRequest,
    QueueDrainResponse,
    QueueListRequest,
    QueueListResponse,
)
from staffqueue.schemas.snapshot import ChangeSet
from staffqueue.services.base import OwnerScopedService
from staffqueue.services.exceptions import ConflictError

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "This staff member already has an appointment at this time."


class BookingService(OwnerScopedService):
    """Create, edit and queue appointments for an owner."""

    async def create(self, request: AppointmentCreateRequest) -> AppointmentResult:
        owner_id = self._owner(request.owner_id)
        logger.info("Creating appointment for %s", request.customer_name)
        snapshot = await self._provider.load_snapshot(owner_id)
        service = self._require_service(snapshot, request.service_id)

        warnings: List[str] = []
        if request.staff_id:
            member = self._require_staff(snapshot, request.staff_id)
            conflict = find_conflict(
                snapshot.appointments,
                snapshot.services,
                member.id,
                request.appointment_date,
                request.appointment_time,
                service.duration,
            )
            if conflict is not None:
                raise ConflictError(CONFLICT_MESSAGE, conflict.id)
            # Explicit choices skip the capacity and leave rules; surface them instead.
            warnings = explicit_choice_warnings(
                snapshot.appointments,
                snapshot.services,
                member,
                service,
                request.appointment_date,
                request.appointment_time,
            )
            decision = AssignmentDecision.assigned(member)
        else:
            decision = resolve_assignment(
                snapshot.appointments,
                snapshot.staff,
                snapshot.services,
                service,
                request.appointment_date,
                time=request.appointment_time,
            )

        appointment = Appointment(
            id=self._provider.new_id("APT"),
            owner_id=owner_id,
            customer_name=request.customer_name,
            service_id=service.id,
            staff_id=decision.staff_id,
            appointment_date=request.appointment_date,
            appointment_time=request.appointment_time,
            status="Scheduled",
            in_queue=decision.queued,
            queue_position=decision.queue_position,
        )
        description = decision.describe(appointment.customer_name)
        action = "appointment_queued" if decision.queued else "appointment_created"
        await self._provider.commit(
            owner_id,
            ChangeSet(
                appointments=[appointment],
                activity=[self._activity(owner_id, action, description, appointment.id)],
            ),
        )
        logger.info(description)

        return AppointmentResult(
            appointment=appointment,
            queued=decision.queued,
            queue_position=decision.queue_position,
            staff_name=decision.staff_name,
            warnings=warnings,
            description=description,
        )

    async def update(self, request: AppointmentUpdateRequest) -> AppointmentResult:
        owner_id = self._owner(request.owner_id)
        logger.info("Updating appointment %s", request.appointment_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_appointment(snapshot, request.appointment_id)
        service = self._require_service(snapshot, request.service_id)

        warnings: List[str] = []
        staff_name = None
        if request.staff_id:
            member = self._require_staff(snapshot, request.staff_id)
            conflict = find_conflict(
                snapshot.appointments,
                snapshot.services,
                member.id,
                request.appointment_date,
                request.appointment_time,
                service.duration,
                exclude_appointment_id=existing.id,
            )
            if conflict is not None:
                raise ConflictError(CONFLICT_MESSAGE, conflict.id)
            warnings = explicit_choice_warnings(
                snapshot.appointments,
                snapshot.services,
                member,
                service,
                request.appointment_date,
                request.appointment_time,
                exclude_appointment_id=existing.id,
            )
            staff_name = member.name

        updates = {
            "customer_name": request.customer_name,
            "service_id": service.id,
            "appointment_date": request.appointment_date,
            "appointment_time": request.appointment_time,
            "status": request.status,
        }
        changes = ChangeSet()
        if existing.in_queue:
            if request.staff_id or request.status != "Scheduled":
                updates.update(staff_id=request.staff_id or None, in_queue=False, queue_position=None)
                changes.upsert_appointments(dequeue(snapshot.appointments, existing.id))
        else:
            updates["staff_id"] = request.staff_id or None

        updated = existing.model_copy(update=updates)
        changes.upsert_appointments([updated])
        description = f'Appointment for "{updated.customer_name}" updated'
        changes.activity.append(
            self._activity(owner_id, "appointment_updated", description, updated.id)
        )
        await self._provider.commit(owner_id, changes)

        return AppointmentResult(
            appointment=updated,
            queued=updated.in_queue,
            queue_position=updated.queue_position,
            staff_name=staff_name,
            warnings=warnings,
            description=description,
        )

    async def set_status(self, request: AppointmentStatusRequest) -> AppointmentResult:
        owner_id = self._owner(request.owner_id)
        logger.info("Marking appointment %s as %s", request.appointment_id, request.status)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_appointment(snapshot, request.appointment_id)

        changes = ChangeSet()
        updates = {"status": request.status}
        if existing.in_queue and request.status != "Scheduled":
            updates.update(in_queue=False, queue_position=None)
            changes.upsert_appointments(dequeue(snapshot.appointments, existing.id))

        updated = existing.model_copy(update=updates)
        changes.upsert_appointments([updated])
        description = f'Appointment for "{updated.customer_name}" marked as {request.status}'
        changes.activity.append(
            self._activity(owner_id, "appointment_status_updated", description, updated.id)
        )
        await self._provider.commit(owner_id, changes)

        member = snapshot.staff_member(updated.staff_id) if updated.staff_id else None
        return AppointmentResult(
            appointment=updated,
            queued=updated.in_queue,
            queue_position=updated.queue_position,
            staff_name=member.name if member else None,
            description=description,
        )

    async def delete(self, request: AppointmentDeleteRequest) -> AppointmentDeleteResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Deleting appointment %s", request.appointment_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_appointment(snapshot, request.appointment_id)

        changes = ChangeSet(deleted_appointment_ids=[existing.id])
        renumbered: List[Appointment] = []
        if existing.in_queue:
            renumbered = dequeue(snapshot.appointments, existing.id)
            changes.upsert_appointments(renumbered)
        changes.activity.append(
            self._activity(
                owner_id,
                "appointment_deleted",
                f'Appointment for "{existing.customer_name}" deleted',
            )
        )
        await self._provider.commit(owner_id, changes)
        return AppointmentDeleteResponse(
            status="deleted",
            appointment_id=existing.id,
            renumbered=len(renumbered),
        )

    async def list(self, request: AppointmentListRequest) -> AppointmentListResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Listing appointments for owner %s", owner_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        items = [
            appointment
            for appointment in snapshot.appointments
            if (request.appointment_date is None or appointment.appointment_date == request.appointment_date)
            and (request.status is None or appointment.status == request.status)
        ]
        items.sort(key=lambda item: (item.appointment_date, item.appointment_time), reverse=True)
        return AppointmentListResponse(total=len(items), items=items)

    async def check_conflict(self, request: ConflictCheckRequest) -> ConflictCheckResponse:
        owner_id = self._owner(request.owner_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        service = self._require_service(snapshot, request.service_id)
        member = self._require_staff(snapshot, request.staff_id)

        conflict = find_conflict(
            snapshot.appointments,
            snapshot.services,
            member.id,
            request.appointment_date,
            request.appointment_time,
            service.duration,
            exclude_appointment_id=request.exclude_appointment_id,
        )
        warnings = explicit_choice_warnings(
            snapshot.appointments,
            snapshot.services,
            member,
            service,
            request.appointment_date,
            request.appointment_time,
            exclude_appointment_id=request.exclude_appointment_id,
        )
        return ConflictCheckResponse(
            conflict=conflict is not None,
            conflicting_appointment_id=conflict.id if conflict else None,
            warnings=warnings,
            message=CONFLICT_MESSAGE if conflict else None,
        )

    async def queue(self, request: QueueListRequest) -> QueueListResponse:
        owner_id = self._owner(request.owner_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        items = queued_in_order(snapshot.appointments)
        return QueueListResponse(total=len(items), items=items)

    async def assign_from_queue(self, request: QueueAssignRequest) -> QueueAssignResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Assigning queued appointment %s", request.appointment_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        self._require_appointment(snapshot, request.appointment_id)

        outcome = assign_from_queue(
            snapshot.appointments,
            snapshot.staff,
            snapshot.services,
            request.appointment_id,
        )
        if not outcome.success:
            logger.info("Queued appointment %s not assigned: %s", request.appointment_id, outcome.reason)
            return QueueAssignResponse(success=False, message=outcome.reason or "Not assigned")

        changes = ChangeSet()
        changes.upsert_appointments(outcome.changed)
        changes.activity.append(
            self._activity(owner_id, "queue_assigned", outcome.description, request.appointment_id)
        )
        await self._provider.commit(owner_id, changes)
        return QueueAssignResponse(
            success=True,
            appointment=outcome.appointment,
            staff_id=outcome.staff_id,
            staff_name=outcome.staff_name,
            message=outcome.description,
        )

    async def drain_queue(self, request: QueueDrainRequest) -> QueueDrainResponse:
        owner_id = self._owner(request.owner_id)
        logger.info("Draining queue for owner %s", owner_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        drained = drain_queue(snapshot.appointments, snapshot.staff, snapshot.services, self._today())
        if drained.assigned:
            changes = ChangeSet()
            changes.upsert_appointments(drained.changed)
            changes.activity.extend(
                self._activity(owner_id, "queue_assigned", description, appointment.id)
                for appointment, description in zip(drained.assigned, drained.descriptions)
            )
            await self._provider.commit(owner_id, changes)
            return QueueDrainResponse(assigned=drained.assigned, remaining=drained.remaining)
        return QueueDrainResponse(remaining=queued_in_order(snapshot.appointments))
