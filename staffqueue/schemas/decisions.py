from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from staffqueue.schemas.entities import Appointment, StaffMember


class AssignmentDecision(BaseModel):
    """Outcome of auto-assignment: a staff member, or a queue position."""

    staff_id: Optional[str] = None
    staff_name: Optional[str] = None
    queued: bool = False
    queue_position: Optional[int] = None

    @classmethod
    def assigned(cls, member: StaffMember) -> "AssignmentDecision":
        return cls(staff_id=member.id, staff_name=member.name)

    @classmethod
    def enqueued(cls, position: int) -> "AssignmentDecision":
        return cls(queued=True, queue_position=position)

    def describe(self, customer_name: str) -> str:
        if self.queued:
            return f'Appointment for "{customer_name}" added to queue (position {self.queue_position})'
        return (
            f'Appointment for "{customer_name}" created and assigned to '
            f"{self.staff_name or 'staff'}"
        )


class StaffLoad(BaseModel):
    staff: StaffMember
    load: int


class QueueAssignment(BaseModel):
    success: bool
    staff_id: Optional[str] = None
    staff_name: Optional[str] = None
    appointment: Optional[Appointment] = None
    renumbered: List[Appointment] = Field(default_factory=list)
    reason: Optional[str] = None
    description: Optional[str] = None

    @property
    def changed(self) -> List[Appointment]:
        if not self.success or self.appointment is None:
            return []
        return [self.appointment, *self.renumbered]


class QueueDrain(BaseModel):
    assigned: List[Appointment] = Field(default_factory=list)
    remaining: List[Appointment] = Field(default_factory=list)
    descriptions: List[str] = Field(default_factory=list)

    @property
    def changed(self) -> List[Appointment]:
        return [*self.assigned, *self.remaining]


class CascadeResult(BaseModel):
    to_requeue: List[Appointment] = Field(default_factory=list)
    description: Optional[str] = None
