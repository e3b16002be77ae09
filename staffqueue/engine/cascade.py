from __future__ import annotations

import logging
from datetime import date
from typing import List, Sequence

from staffqueue.engine.queue import enqueue
from staffqueue.schemas.decisions import CascadeResult
from staffqueue.schemas.entities import Appointment

logger = logging.getLogger(__name__)


def cascade_removal(
    appointments: Sequence[Appointment],
    staff_id: str,
    today: date,
) -> CascadeResult:
    """Move a departing staff member's upcoming bookings to the queue.

    Only Scheduled appointments dated today or later are moved. Past and
    finished appointments keep their ``staff_id`` as history. Moved
    appointments get consecutive positions after the current end of the
    queue, in date and time order.
    """

    affected = [
        appointment
        for appointment in appointments
        if appointment.staff_id == staff_id
        and appointment.status == "Scheduled"
        and appointment.appointment_date >= today
    ]
    affected.sort(key=lambda item: (item.appointment_date, item.appointment_time))

    next_position = enqueue(appointments)
    to_requeue: List[Appointment] = []
    for offset, appointment in enumerate(affected):
        to_requeue.append(
            appointment.model_copy(
                update={
                    "staff_id": None,
                    "in_queue": True,
                    "queue_position": next_position + offset,
                }
            )
        )

    if not to_requeue:
        return CascadeResult()

    logger.debug("Cascade moved %s appointment(s) of staff %s to the queue", len(to_requeue), staff_id)
    return CascadeResult(
        to_requeue=to_requeue,
        description=f"{len(to_requeue)} upcoming appointment(s) moved to the queue",
    )
