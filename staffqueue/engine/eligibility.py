"""Skill matching, daily load and bookability of staff members."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence

from staffqueue.engine.conflicts import find_conflict, has_conflict
from staffqueue.schemas.decisions import StaffLoad
from staffqueue.schemas.entities import Appointment, Service, StaffMember


def eligible_staff(staff: Iterable[StaffMember], service: Service) -> List[StaffMember]:
    """Staff whose skill matches the service, in their input order."""

    return [member for member in staff if member.service_type == service.required_staff_type]


def load_on(
    appointments: Iterable[Appointment],
    staff_id: str,
    appointment_date: date,
    exclude_appointment_id: Optional[str] = None,
) -> int:
    """Count non-cancelled appointments held by ``staff_id`` on ``appointment_date``."""

    return sum(
        1
        for appointment in appointments
        if appointment.staff_id == staff_id
        and appointment.appointment_date == appointment_date
        and appointment.status != "Cancelled"
        and not (exclude_appointment_id and appointment.id == exclude_appointment_id)
    )


def is_bookable(member: StaffMember, load: int) -> bool:
    return member.availability_status == "Available" and load < member.daily_capacity


def staff_with_load(
    staff: Iterable[StaffMember],
    appointments: Sequence[Appointment],
    appointment_date: date,
) -> List[StaffLoad]:
    return [
        StaffLoad(staff=member, load=load_on(appointments, member.id, appointment_date))
        for member in staff
    ]


def explicit_choice_warnings(
    appointments: Sequence[Appointment],
    services: Sequence[Service],
    member: StaffMember,
    service: Service,
    appointment_date: date,
    time: int,
    exclude_appointment_id: Optional[str] = None,
) -> List[str]:
    """Advisory messages for an operator who picked ``member`` by hand.

    An explicit choice overrides skill, leave and capacity rules, so none of
    these block the booking. Conflicts are reported too, but callers decide
    whether they block.
    """

    warnings: List[str] = []
    if member.service_type != service.required_staff_type:
        warnings.append(
            f"{member.name} is a {member.service_type} but {service.name} "
            f"requires {service.required_staff_type}."
        )
    if member.availability_status == "On Leave":
        warnings.append(f"{member.name} is currently on leave.")
    load = load_on(appointments, member.id, appointment_date, exclude_appointment_id)
    if load >= member.daily_capacity:
        warnings.append(
            f"{member.name} already has {member.daily_capacity} appointments on "
            f"{appointment_date.isoformat()}."
        )
    conflict = find_conflict(
        appointments,
        services,
        member.id,
        appointment_date,
        time,
        service.duration,
        exclude_appointment_id,
    )
    if conflict is not None:
        warnings.append(f"{member.name} already has an appointment at this time.")
    return warnings


def first_bookable(
    appointments: Sequence[Appointment],
    staff: Iterable[StaffMember],
    services: Sequence[Service],
    service: Service,
    appointment_date: date,
    *,
    time: Optional[int] = None,
    exclude_appointment_id: Optional[str] = None,
) -> Optional[StaffMember]:
    """First eligible staff member, in list order, who can take the booking.

    Selection is first-fit: input order breaks ties, load never does. With a
    ``time`` the candidate must also be free for that slot.
    """

    for member in eligible_staff(staff, service):
        load = load_on(appointments, member.id, appointment_date, exclude_appointment_id)
        if not is_bookable(member, load):
            continue
        if time is not None and has_conflict(
            appointments,
            services,
            member.id,
            appointment_date,
            time,
            service.duration,
            exclude_appointment_id,
        ):
            continue
        return member
    return None
