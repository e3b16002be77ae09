from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from staffqueue.schemas.decisions import StaffLoad
from staffqueue.schemas.entities import ActivityLogEntry, CalendarDate


class DashboardRequest(BaseModel):
    """Request payload for the daily overview."""

    owner_id: Optional[str] = None
    date: Optional[CalendarDate] = Field(
        default=None,
        description="Local date (YYYY-MM-DD). Defaults to today when omitted.",
    )


class DashboardResponse(BaseModel):
    date: CalendarDate
    total_appointments: int = Field(..., description="Non-cancelled appointments on the date")
    completed: int
    pending: int = Field(..., description="Scheduled appointments on the date")
    queue_length: int
    staff_loads: List[StaffLoad]
    recent_activity: List[ActivityLogEntry]
