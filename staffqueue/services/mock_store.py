from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import DefaultDict, Dict, Iterator, List, Optional

from staffqueue.schemas.entities import (
    ActivityLogEntry,
    Appointment,
    Service,
    StaffMember,
    utc_now,
)
from staffqueue.schemas.snapshot import ChangeSet, Snapshot

DEMO_OWNER_ID = "demo-owner"


@dataclass
class OwnerRecords:
    services: Dict[str, Service] = field(default_factory=dict)
    staff: Dict[str, StaffMember] = field(default_factory=dict)
    appointments: Dict[str, Appointment] = field(default_factory=dict)
    activity: List[ActivityLogEntry] = field(default_factory=list)


class InMemoryStore:
    """Snapshot provider keeping every owner's records in process memory.

    Records keep insertion order, which is the order auto-assignment walks
    staff in. The activity log keeps the newest ``activity_limit`` entries.
    """

    def __init__(self, *, activity_limit: int = 50, seed: bool = True) -> None:
        self._activity_limit = activity_limit
        self._owners: DefaultDict[str, OwnerRecords] = defaultdict(OwnerRecords)
        self._counters: DefaultDict[str, Iterator[int]] = defaultdict(lambda: itertools.count(1))
        if seed:
            self._seed_defaults()

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counters[prefix]):05d}"

    def _seed_defaults(self) -> None:
        owner = self._owners[DEMO_OWNER_ID]
        services = [
            Service(id=self.new_id("SRV"), owner_id=DEMO_OWNER_ID, name="Haircut", duration=30, required_staff_type="Stylist"),
            Service(id=self.new_id("SRV"), owner_id=DEMO_OWNER_ID, name="Beard Trim", duration=15, required_staff_type="Barber"),
            Service(id=self.new_id("SRV"), owner_id=DEMO_OWNER_ID, name="Deep Tissue Massage", duration=60, required_staff_type="Therapist"),
        ]
        staff = [
            StaffMember(id=self.new_id("STF"), owner_id=DEMO_OWNER_ID, name="Priya Nair", service_type="Stylist", daily_capacity=4),
            StaffMember(id=self.new_id("STF"), owner_id=DEMO_OWNER_ID, name="Marco Silva", service_type="Stylist", daily_capacity=3),
            StaffMember(id=self.new_id("STF"), owner_id=DEMO_OWNER_ID, name="Omar Haddad", service_type="Barber", daily_capacity=5),
            StaffMember(
                id=self.new_id("STF"),
                owner_id=DEMO_OWNER_ID,
                name="Lena Fischer",
                service_type="Therapist",
                daily_capacity=2,
                availability_status="On Leave",
            ),
        ]
        for service in services:
            owner.services[service.id] = service
        for member in staff:
            owner.staff[member.id] = member

        today = date.today()
        seeds = [
            Appointment(
                id=self.new_id("APT"),
                owner_id=DEMO_OWNER_ID,
                customer_name="Alex Tan",
                service_id=services[0].id,
                staff_id=staff[0].id,
                appointment_date=today,
                appointment_time="09:00",
            ),
            Appointment(
                id=self.new_id("APT"),
                owner_id=DEMO_OWNER_ID,
                customer_name="Jamie Lee",
                service_id=services[1].id,
                staff_id=staff[2].id,
                appointment_date=today,
                appointment_time="10:30",
            ),
            Appointment(
                id=self.new_id("APT"),
                owner_id=DEMO_OWNER_ID,
                customer_name="Sam Ortiz",
                service_id=services[2].id,
                appointment_date=today + timedelta(days=1),
                appointment_time="14:00",
                in_queue=True,
                queue_position=1,
            ),
        ]
        for appointment in seeds:
            owner.appointments[appointment.id] = appointment

    async def load_snapshot(self, owner_id: str) -> Snapshot:
        records = self._owners.get(owner_id) or OwnerRecords()
        return Snapshot(
            owner_id=owner_id,
            services=list(records.services.values()),
            staff=list(records.staff.values()),
            appointments=list(records.appointments.values()),
        )

    async def commit(self, owner_id: str, changes: ChangeSet) -> None:
        records = self._owners[owner_id]
        now = utc_now()
        for service in changes.services:
            records.services[service.id] = service
        for member in changes.staff:
            records.staff[member.id] = member
        for appointment in changes.appointments:
            records.appointments[appointment.id] = appointment.model_copy(update={"updated_at": now})
        for service_id in changes.deleted_service_ids:
            records.services.pop(service_id, None)
        for staff_id in changes.deleted_staff_ids:
            records.staff.pop(staff_id, None)
        for appointment_id in changes.deleted_appointment_ids:
            records.appointments.pop(appointment_id, None)
        if changes.activity:
            records.activity = (list(reversed(changes.activity)) + records.activity)[: self._activity_limit]

    async def recent_activity(self, owner_id: str, limit: int) -> List[ActivityLogEntry]:
        records = self._owners.get(owner_id)
        return list(records.activity[:limit]) if records else []


_mock_store: Optional[InMemoryStore] = None


def get_mock_store(*, activity_limit: int = 50) -> InMemoryStore:
    global _mock_store
    if _mock_store is None:
        _mock_store = InMemoryStore(activity_limit=activity_limit)
    return _mock_store


def reset_mock_store() -> None:
    global _mock_store
    _mock_store = None
