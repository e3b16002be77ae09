from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from staffqueue.schemas.decisions import StaffLoad
from staffqueue.schemas.entities import (
    Appointment,
    AvailabilityStatus,
    CalendarDate,
    StaffMember,
)


class StaffCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    service_type: str = Field(..., min_length=1, description="Skill label matched against services")
    daily_capacity: int = Field(..., ge=1)
    availability_status: AvailabilityStatus = "Available"


class StaffUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = None
    staff_id: str
    name: Optional[str] = Field(None, min_length=1)
    service_type: Optional[str] = Field(None, min_length=1)
    daily_capacity: Optional[int] = Field(None, ge=1)
    availability_status: Optional[AvailabilityStatus] = None


class StaffDeleteRequest(BaseModel):
    owner_id: Optional[str] = None
    staff_id: str


class StaffAvailabilityRequest(BaseModel):
    owner_id: Optional[str] = None
    staff_id: str
    availability_status: Optional[AvailabilityStatus] = Field(
        None, description="Target status. Empty toggles the current one."
    )


class StaffListRequest(BaseModel):
    owner_id: Optional[str] = None
    date: Optional[CalendarDate] = Field(None, description="Day to measure load on. Defaults to today.")


class StaffListResponse(BaseModel):
    date: CalendarDate
    items: List[StaffLoad]


class StaffChangeResponse(BaseModel):
    staff: StaffMember
    requeued: List[Appointment] = Field(default_factory=list)
    assigned: List[Appointment] = Field(default_factory=list)
    description: str


class StaffTypesResponse(BaseModel):
    types: List[str]
