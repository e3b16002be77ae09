from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from staffqueue.engine.eligibility import first_bookable
from staffqueue.engine.queue import enqueue
from staffqueue.schemas.decisions import AssignmentDecision
from staffqueue.schemas.entities import Appointment, Service, StaffMember

logger = logging.getLogger(__name__)


def resolve_assignment(
    appointments: Sequence[Appointment],
    staff: Sequence[StaffMember],
    services: Sequence[Service],
    service: Service,
    appointment_date: date,
    *,
    time: Optional[int] = None,
    exclude_appointment_id: Optional[str] = None,
) -> AssignmentDecision:
    """Pick a staff member for a booking made without an explicit choice.

    The first bookable eligible staff member wins. When nobody qualifies the
    booking is queued at the next position; this is never an error.

    Only auto-assignment goes through here. An operator's explicit staff
    choice is checked for conflicts by the caller but is allowed past leave
    and capacity limits, which only produce warnings
    (see ``explicit_choice_warnings``).
    """

    member = first_bookable(
        appointments,
        staff,
        services,
        service,
        appointment_date,
        time=time,
        exclude_appointment_id=exclude_appointment_id,
    )
    if member is not None:
        logger.debug("Auto-assigned %s on %s to staff %s", service.name, appointment_date, member.id)
        return AssignmentDecision.assigned(member)

    position = enqueue(appointments)
    logger.debug("No bookable staff for %s on %s, queue position %s", service.name, appointment_date, position)
    return AssignmentDecision.enqueued(position)
