from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from staffqueue.schemas.entities import Appointment


class QueueListRequest(BaseModel):
    owner_id: Optional[str] = None


class QueueListResponse(BaseModel):
    total: int
    items: List[Appointment]


class QueueAssignRequest(BaseModel):
    owner_id: Optional[str] = None
    appointment_id: str


class QueueAssignResponse(BaseModel):
    success: bool
    appointment: Optional[Appointment] = None
    staff_id: Optional[str] = None
    staff_name: Optional[str] = None
    message: str


class QueueDrainRequest(BaseModel):
    owner_id: Optional[str] = None


class QueueDrainResponse(BaseModel):
    assigned: List[Appointment] = Field(default_factory=list)
    remaining: List[Appointment] = Field(default_factory=list)
