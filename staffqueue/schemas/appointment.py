from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from staffqueue.schemas.entities import (
    Appointment,
    AppointmentStatus,
    CalendarDate,
    MinuteOfDay,
)


class AppointmentCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = Field(None, description="Owner account. Defaults to the configured owner.")
    customer_name: str = Field(..., min_length=1)
    service_id: str
    appointment_date: CalendarDate = Field(..., description="Local date, YYYY-MM-DD")
    appointment_time: MinuteOfDay = Field(..., description="Local time, HH:MM")
    staff_id: Optional[str] = Field(
        None,
        description="Explicit staff choice. Leave empty to auto-assign or queue.",
    )


class AppointmentUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = None
    appointment_id: str
    customer_name: str = Field(..., min_length=1)
    service_id: str
    appointment_date: CalendarDate
    appointment_time: MinuteOfDay
    staff_id: Optional[str] = Field(None, description="Empty leaves the appointment unassigned")
    status: AppointmentStatus = "Scheduled"


class AppointmentStatusRequest(BaseModel):
    owner_id: Optional[str] = None
    appointment_id: str
    status: AppointmentStatus


class AppointmentDeleteRequest(BaseModel):
    owner_id: Optional[str] = None
    appointment_id: str


class AppointmentListRequest(BaseModel):
    owner_id: Optional[str] = None
    appointment_date: Optional[CalendarDate] = None
    status: Optional[AppointmentStatus] = None


class ConflictCheckRequest(BaseModel):
    owner_id: Optional[str] = None
    staff_id: str
    service_id: str
    appointment_date: CalendarDate
    appointment_time: MinuteOfDay
    exclude_appointment_id: Optional[str] = Field(
        None, description="Appointment being edited, ignored when checking"
    )


class ConflictCheckResponse(BaseModel):
    conflict: bool
    conflicting_appointment_id: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    message: Optional[str] = None


class AppointmentResult(BaseModel):
    appointment: Appointment
    queued: bool = False
    queue_position: Optional[int] = None
    staff_name: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    description: str


class AppointmentListResponse(BaseModel):
    total: int
    items: List[Appointment]


class AppointmentDeleteResponse(BaseModel):
    status: str
    appointment_id: str
    renumbered: int = 0
