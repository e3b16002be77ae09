"""Domain records exchanged between the engine, the services and the stores."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, model_validator

from staffqueue.engine.intervals import format_minute_of_day, parse_minute_of_day


AppointmentStatus = Literal["Scheduled", "Completed", "Cancelled", "No-Show"]
AvailabilityStatus = Literal["Available", "On Leave"]
ServiceDuration = Literal[15, 30, 60]

ActionType = Literal[
    "appointment_created",
    "appointment_queued",
    "appointment_updated",
    "appointment_deleted",
    "appointment_status_updated",
    "queue_assigned",
    "staff_created",
    "staff_updated",
    "staff_deleted",
    "staff_availability_changed",
    "service_created",
    "service_updated",
    "service_deleted",
]

# Minutes since local midnight; "HH:MM" on the wire.
MinuteOfDay = Annotated[
    int,
    BeforeValidator(parse_minute_of_day),
    PlainSerializer(format_minute_of_day, return_type=str),
]

# Local calendar date, no time zone attached.
CalendarDate = date


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Service(BaseModel):
    id: str
    owner_id: str
    name: str
    duration: ServiceDuration
    required_staff_type: str


class StaffMember(BaseModel):
    id: str
    owner_id: str
    name: str
    service_type: str
    daily_capacity: int = Field(..., ge=1)
    availability_status: AvailabilityStatus = "Available"


class Appointment(BaseModel):
    """A customer booking.

    An appointment is either queued (``in_queue`` with a position and no
    staff) or resolved (no position, staff set or deliberately left empty).
    """

    id: str
    owner_id: str
    customer_name: str
    service_id: str
    staff_id: Optional[str] = None
    appointment_date: CalendarDate
    appointment_time: MinuteOfDay
    status: AppointmentStatus = "Scheduled"
    in_queue: bool = False
    queue_position: Optional[int] = Field(default=None, ge=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_queue_state(self) -> "Appointment":
        if self.in_queue:
            if self.staff_id is not None:
                raise ValueError("queued appointment cannot have a staff member")
            if self.queue_position is None:
                raise ValueError("queued appointment requires a queue position")
        elif self.queue_position is not None:
            raise ValueError("queue position is only valid for queued appointments")
        return self


class ActivityLogEntry(BaseModel):
    id: str
    owner_id: str
    action_type: ActionType
    description: str
    appointment_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
