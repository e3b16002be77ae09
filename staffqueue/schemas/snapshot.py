from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, Field

from staffqueue.schemas.entities import ActivityLogEntry, Appointment, Service, StaffMember


class Snapshot(BaseModel):
    """Everything the engine needs for one owner, read in one go."""

    owner_id: str
    services: List[Service] = Field(default_factory=list)
    staff: List[StaffMember] = Field(default_factory=list)
    appointments: List[Appointment] = Field(default_factory=list)

    def service(self, service_id: str) -> Service | None:
        return next((item for item in self.services if item.id == service_id), None)

    def staff_member(self, staff_id: str) -> StaffMember | None:
        return next((item for item in self.staff if item.id == staff_id), None)

    def appointment(self, appointment_id: str) -> Appointment | None:
        return next((item for item in self.appointments if item.id == appointment_id), None)


class ChangeSet(BaseModel):
    """Records written back after a decision, meant to be committed atomically."""

    appointments: List[Appointment] = Field(default_factory=list)
    deleted_appointment_ids: List[str] = Field(default_factory=list)
    staff: List[StaffMember] = Field(default_factory=list)
    deleted_staff_ids: List[str] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    deleted_service_ids: List[str] = Field(default_factory=list)
    activity: List[ActivityLogEntry] = Field(default_factory=list)

    def upsert_appointments(self, appointments: Iterable[Appointment]) -> None:
        """Add appointments, letting a later copy of a record replace an earlier one."""

        by_id = {appointment.id: appointment for appointment in self.appointments}
        for appointment in appointments:
            by_id[appointment.id] = appointment
        self.appointments = list(by_id.values())

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.appointments,
                self.deleted_appointment_ids,
                self.staff,
                self.deleted_staff_ids,
                self.services,
                self.deleted_service_ids,
                self.activity,
            )
        )
