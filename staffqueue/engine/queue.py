"""Waiting list of appointments that have no staff member yet.

Positions among queued appointments always run ``1..N``. Appending takes the
next number after the current maximum, and every removal renumbers whatever
is left, so callers must commit the renumbered records together with the
removal.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from staffqueue.engine.eligibility import first_bookable
from staffqueue.schemas.decisions import QueueAssignment, QueueDrain
from staffqueue.schemas.entities import Appointment, Service, StaffMember

logger = logging.getLogger(__name__)


def enqueue(appointments: Iterable[Appointment]) -> int:
    """Position for the next appointment appended to the queue."""

    positions = [
        appointment.queue_position or 0
        for appointment in appointments
        if appointment.in_queue
    ]
    return max(positions, default=0) + 1


def queued_in_order(appointments: Iterable[Appointment]) -> List[Appointment]:
    queued = [appointment for appointment in appointments if appointment.in_queue]
    queued.sort(key=lambda appointment: appointment.queue_position or 0)
    return queued


def renumber(queued: Iterable[Appointment]) -> List[Appointment]:
    ordered = sorted(queued, key=lambda appointment: appointment.queue_position or 0)
    return [
        appointment.model_copy(update={"queue_position": index})
        for index, appointment in enumerate(ordered, start=1)
    ]


def dequeue(appointments: Iterable[Appointment], appointment_id: str) -> List[Appointment]:
    """Remaining queue after removing ``appointment_id``, renumbered from 1."""

    remaining = [
        appointment
        for appointment in appointments
        if appointment.in_queue and appointment.id != appointment_id
    ]
    return renumber(remaining)


def _resolve(appointment: Appointment, member: StaffMember) -> Appointment:
    return appointment.model_copy(
        update={"staff_id": member.id, "in_queue": False, "queue_position": None}
    )


def assign_from_queue(
    appointments: Sequence[Appointment],
    staff: Sequence[StaffMember],
    services: Sequence[Service],
    appointment_id: str,
    appointment_date: Optional[date] = None,
) -> QueueAssignment:
    """Give a queued appointment to the first bookable staff member.

    Load is measured on ``appointment_date``, which defaults to the
    appointment's own date.
    """

    appointment = next((item for item in appointments if item.id == appointment_id), None)
    if appointment is None:
        return QueueAssignment(success=False, reason="Appointment not found")
    if not appointment.in_queue:
        return QueueAssignment(success=False, reason="Appointment is not in the queue")

    service = next((item for item in services if item.id == appointment.service_id), None)
    if service is None:
        return QueueAssignment(success=False, reason="Service not found")

    member = first_bookable(
        appointments,
        staff,
        services,
        service,
        appointment_date or appointment.appointment_date,
        time=appointment.appointment_time,
        exclude_appointment_id=appointment.id,
    )
    if member is None:
        logger.debug("No bookable staff for queued appointment %s", appointment.id)
        return QueueAssignment(
            success=False,
            reason="No available staff members to assign this appointment.",
        )

    return QueueAssignment(
        success=True,
        staff_id=member.id,
        staff_name=member.name,
        appointment=_resolve(appointment, member),
        renumbered=dequeue(appointments, appointment.id),
        description=(
            f'Appointment for "{appointment.customer_name}" assigned to '
            f"{member.name} from queue"
        ),
    )


def drain_queue(
    appointments: Sequence[Appointment],
    staff: Sequence[StaffMember],
    services: Sequence[Service],
    today: Optional[date] = None,
) -> QueueDrain:
    """Assign as much of the queue as current staff allow, front to back.

    With ``today`` given, queued appointments dated before it stay queued.
    """

    services_by_id: Dict[str, Service] = {service.id: service for service in services}
    working: Dict[str, Appointment] = {appointment.id: appointment for appointment in appointments}
    result = QueueDrain()

    for queued in queued_in_order(appointments):
        if today is not None and queued.appointment_date < today:
            continue
        service = services_by_id.get(queued.service_id)
        if service is None:
            continue
        member = first_bookable(
            list(working.values()),
            staff,
            services,
            service,
            queued.appointment_date,
            time=queued.appointment_time,
            exclude_appointment_id=queued.id,
        )
        if member is None:
            continue
        resolved = _resolve(queued, member)
        working[queued.id] = resolved
        result.assigned.append(resolved)
        result.descriptions.append(
            f'Appointment for "{queued.customer_name}" assigned to {member.name} from queue'
        )

    if result.assigned:
        result.remaining = renumber(item for item in working.values() if item.in_queue)
    logger.debug(
        "Queue drain assigned %s appointment(s), %s still queued",
        len(result.assigned),
        len(queued_in_order(working.values())),
    )
    return result
