from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from staffqueue.schemas.entities import (
    ActionType,
    ActivityLogEntry,
    Appointment,
    Service,
    StaffMember,
)
from staffqueue.schemas.snapshot import Snapshot
from staffqueue.services.exceptions import NotFoundError
from staffqueue.services.ports import SnapshotProvider


class OwnerScopedService:
    """Shared plumbing for services that read a snapshot and commit changes."""

    def __init__(
        self,
        provider: SnapshotProvider,
        *,
        default_owner_id: str,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._provider = provider
        self._default_owner_id = default_owner_id
        self._clock = clock

    def _owner(self, owner_id: Optional[str]) -> str:
        return owner_id or self._default_owner_id

    def _today(self) -> date:
        return self._clock()

    def _activity(
        self,
        owner_id: str,
        action_type: ActionType,
        description: str,
        appointment_id: Optional[str] = None,
    ) -> ActivityLogEntry:
        return ActivityLogEntry(
            id=self._provider.new_id("LOG"),
            owner_id=owner_id,
            action_type=action_type,
            description=description,
            appointment_id=appointment_id,
        )

    @staticmethod
    def _require_service(snapshot: Snapshot, service_id: str) -> Service:
        service = snapshot.service(service_id)
        if service is None:
            raise NotFoundError(f"Service '{service_id}' not found")
        return service

    @staticmethod
    def _require_staff(snapshot: Snapshot, staff_id: str) -> StaffMember:
        member = snapshot.staff_member(staff_id)
        if member is None:
            raise NotFoundError(f"Staff member '{staff_id}' not found")
        return member

    @staticmethod
    def _require_appointment(snapshot: Snapshot, appointment_id: str) -> Appointment:
        appointment = snapshot.appointment(appointment_id)
        if appointment is None:
            raise NotFoundError(f"Appointment '{appointment_id}' not found")
        return appointment
