"""Detect double bookings for a staff member."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Optional

from staffqueue.engine.intervals import overlaps
from staffqueue.schemas.entities import Appointment, Service

logger = logging.getLogger(__name__)


def find_conflict(
    appointments: Iterable[Appointment],
    services: Iterable[Service],
    staff_id: str,
    appointment_date: date,
    time: int,
    duration: int,
    exclude_appointment_id: Optional[str] = None,
) -> Optional[Appointment]:
    """Return the first booking of ``staff_id`` that overlaps the candidate slot.

    Cancelled bookings and the appointment being edited are ignored. A booking
    whose service can no longer be resolved is skipped.
    """

    durations: Dict[str, int] = {service.id: service.duration for service in services}
    for existing in appointments:
        if exclude_appointment_id and existing.id == exclude_appointment_id:
            continue
        if existing.staff_id != staff_id:
            continue
        if existing.appointment_date != appointment_date:
            continue
        if existing.status == "Cancelled":
            continue

        existing_duration = durations.get(existing.service_id)
        if existing_duration is None:
            logger.debug(
                "Skipping appointment %s with unknown service %s",
                existing.id,
                existing.service_id,
            )
            continue

        if overlaps(time, duration, existing.appointment_time, existing_duration):
            logger.debug(
                "Slot %s+%s for staff %s on %s overlaps appointment %s",
                time,
                duration,
                staff_id,
                appointment_date,
                existing.id,
            )
            return existing
    return None


def has_conflict(
    appointments: Iterable[Appointment],
    services: Iterable[Service],
    staff_id: str,
    appointment_date: date,
    time: int,
    duration: int,
    exclude_appointment_id: Optional[str] = None,
) -> bool:
    return (
        find_conflict(
            appointments,
            services,
            staff_id,
            appointment_date,
            time,
            duration,
            exclude_appointment_id,
        )
        is not None
    )
