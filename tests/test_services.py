import asyncio
from datetime import date

import pytest

from staffqueue.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentDeleteRequest,
    AppointmentListRequest,
    AppointmentStatusRequest,
    AppointmentUpdateRequest,
    ConflictCheckRequest,
)
from staffqueue.schemas.catalog import (
    ServiceCreateRequest,
    ServiceDeleteRequest,
    ServiceListRequest,
    ServiceUpdateRequest,
)
from staffqueue.schemas.dashboard import DashboardRequest
from staffqueue.schemas.entities import Appointment, Service, StaffMember
from staffqueue.schemas.queue import QueueAssignRequest, QueueDrainRequest, QueueListRequest
from staffqueue.schemas.snapshot import ChangeSet
from staffqueue.schemas.staff import (
    StaffAvailabilityRequest,
    StaffCreateRequest,
    StaffDeleteRequest,
    StaffListRequest,
    StaffUpdateRequest,
)
from staffqueue.services.booking import BookingService
from staffqueue.services.catalog import CatalogService
from staffqueue.services.dashboard import DashboardService
from staffqueue.services.exceptions import ConflictError, NotFoundError
from staffqueue.services.mock_store import InMemoryStore, reset_mock_store
from staffqueue.services.staff import StaffService


OWNER = "salon-42"
TODAY = date(2025, 9, 6)
YESTERDAY = date(2025, 9, 5)
TOMORROW = date(2025, 9, 7)

HAIRCUT = Service(id="srv-hair", owner_id=OWNER, name="Haircut", duration=30, required_staff_type="Stylist")
MASSAGE = Service(id="srv-massage", owner_id=OWNER, name="Massage", duration=60, required_staff_type="Therapist")
PRIYA = StaffMember(id="stf-priya", owner_id=OWNER, name="Priya Nair", service_type="Stylist", daily_capacity=2)
MARCO = StaffMember(id="stf-marco", owner_id=OWNER, name="Marco Silva", service_type="Stylist", daily_capacity=1)
LENA = StaffMember(
    id="stf-lena",
    owner_id=OWNER,
    name="Lena Fischer",
    service_type="Therapist",
    daily_capacity=2,
    availability_status="On Leave",
)


def _today() -> date:
    return TODAY


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_mock_store()
    yield
    reset_mock_store()


@pytest.fixture
def store() -> InMemoryStore:
    store = InMemoryStore(seed=False)
    asyncio.run(
        store.commit(
            OWNER,
            ChangeSet(services=[HAIRCUT, MASSAGE], staff=[PRIYA, MARCO, LENA]),
        )
    )
    return store


def _booking(store: InMemoryStore) -> BookingService:
    return BookingService(store, default_owner_id=OWNER, clock=_today)


def _staff(store: InMemoryStore, **kwargs) -> StaffService:
    return StaffService(store, default_owner_id=OWNER, clock=_today, **kwargs)


def _book(service: BookingService, customer: str, time: str, **kwargs):
    request = AppointmentCreateRequest(
        customer_name=customer,
        service_id=kwargs.pop("service_id", HAIRCUT.id),
        appointment_date=kwargs.pop("appointment_date", TODAY),
        appointment_time=time,
        **kwargs,
    )
    return asyncio.run(service.create(request))


def _queue_positions(service: BookingService) -> list:
    response = asyncio.run(service.queue(QueueListRequest()))
    return [(item.id, item.queue_position) for item in response.items]


def test_auto_assignment_fills_staff_in_order_then_queues(store: InMemoryStore) -> None:
    service = _booking(store)

    first = _book(service, "Ana", "09:00")
    second = _book(service, "Ben", "10:00")
    third = _book(service, "Cai", "11:00")
    fourth = _book(service, "Dee", "12:00")

    assert first.appointment.staff_id == PRIYA.id
    assert second.appointment.staff_id == PRIYA.id
    assert third.appointment.staff_id == MARCO.id
    assert third.description == 'Appointment for "Cai" created and assigned to Marco Silva'
    assert fourth.queued is True
    assert fourth.appointment.staff_id is None
    assert fourth.queue_position == 1
    assert fourth.description == 'Appointment for "Dee" added to queue (position 1)'

    activity = asyncio.run(store.recent_activity(OWNER, 10))
    assert [entry.action_type for entry in activity] == [
        "appointment_queued",
        "appointment_created",
        "appointment_created",
        "appointment_created",
    ]
    assert activity[0].appointment_id == fourth.appointment.id


def test_explicit_staff_conflict_is_rejected(store: InMemoryStore) -> None:
    service = _booking(store)
    first = _book(service, "Ana", "09:00", staff_id=PRIYA.id)

    with pytest.raises(ConflictError) as excinfo:
        _book(service, "Ben", "09:15", staff_id=PRIYA.id)
    assert excinfo.value.conflicting_appointment_id == first.appointment.id

    touching = _book(service, "Ben", "09:30", staff_id=PRIYA.id)
    assert touching.appointment.staff_id == PRIYA.id

    check = asyncio.run(
        service.check_conflict(
            ConflictCheckRequest(
                staff_id=PRIYA.id,
                service_id=HAIRCUT.id,
                appointment_date=TODAY,
                appointment_time="09:10",
            )
        )
    )
    assert check.conflict is True
    assert check.conflicting_appointment_id == first.appointment.id
    assert check.message == "This staff member already has an appointment at this time."


def test_explicit_choice_overrides_leave_and_skill_with_warnings(store: InMemoryStore) -> None:
    result = _book(_booking(store), "Ana", "09:00", staff_id=LENA.id)

    assert result.queued is False
    assert result.appointment.staff_id == LENA.id
    assert any("on leave" in warning for warning in result.warnings)
    assert any("requires Stylist" in warning for warning in result.warnings)


def test_unknown_service_or_staff_is_not_found(store: InMemoryStore) -> None:
    service = _booking(store)

    with pytest.raises(NotFoundError):
        _book(service, "Ana", "09:00", service_id="srv-missing")
    with pytest.raises(NotFoundError):
        _book(service, "Ana", "09:00", staff_id="stf-missing")
    with pytest.raises(NotFoundError):
        asyncio.run(service.assign_from_queue(QueueAssignRequest(appointment_id="APT-404")))


def test_deleting_queued_appointment_renumbers_queue(store: InMemoryStore) -> None:
    service = _booking(store)
    first = _book(service, "Ana", "09:00", service_id=MASSAGE.id)
    second = _book(service, "Ben", "11:00", service_id=MASSAGE.id)
    third = _book(service, "Cai", "13:00", service_id=MASSAGE.id)
    assert [first.queue_position, second.queue_position, third.queue_position] == [1, 2, 3]

    response = asyncio.run(service.delete(AppointmentDeleteRequest(appointment_id=second.appointment.id)))

    assert response.renumbered == 2
    assert _queue_positions(service) == [(first.appointment.id, 1), (third.appointment.id, 2)]
    activity = asyncio.run(store.recent_activity(OWNER, 1))
    assert activity[0].action_type == "appointment_deleted"
    assert activity[0].appointment_id is None


def test_cancelling_queued_appointment_leaves_the_queue(store: InMemoryStore) -> None:
    service = _booking(store)
    first = _book(service, "Ana", "09:00", service_id=MASSAGE.id)
    second = _book(service, "Ben", "11:00", service_id=MASSAGE.id)

    result = asyncio.run(
        service.set_status(AppointmentStatusRequest(appointment_id=first.appointment.id, status="Cancelled"))
    )

    assert result.appointment.in_queue is False
    assert result.appointment.queue_position is None
    assert result.description == 'Appointment for "Ana" marked as Cancelled'
    assert _queue_positions(service) == [(second.appointment.id, 1)]


def test_editing_queued_appointment_with_staff_choice_dequeues_it(store: InMemoryStore) -> None:
    service = _booking(store)
    first = _book(service, "Ana", "09:00", service_id=MASSAGE.id)
    second = _book(service, "Ben", "11:00", service_id=MASSAGE.id)

    result = asyncio.run(
        service.update(
            AppointmentUpdateRequest(
                appointment_id=first.appointment.id,
                customer_name="Ana Ruiz",
                service_id=MASSAGE.id,
                appointment_date=TODAY,
                appointment_time="09:30",
                staff_id=LENA.id,
            )
        )
    )

    assert result.appointment.staff_id == LENA.id
    assert result.appointment.in_queue is False
    assert result.appointment.appointment_time == 570
    assert result.description == 'Appointment for "Ana Ruiz" updated'
    assert any("on leave" in warning for warning in result.warnings)
    assert _queue_positions(service) == [(second.appointment.id, 1)]


def test_queue_assignment_and_drain_once_staff_returns(store: InMemoryStore) -> None:
    booking = _booking(store)
    first = _book(booking, "Ana", "09:00", service_id=MASSAGE.id)
    second = _book(booking, "Ben", "11:00", service_id=MASSAGE.id)
    third = _book(booking, "Cai", "13:00", service_id=MASSAGE.id)

    blocked = asyncio.run(booking.assign_from_queue(QueueAssignRequest(appointment_id=first.appointment.id)))
    assert blocked.success is False
    assert blocked.message == "No available staff members to assign this appointment."

    staff = _staff(store, auto_drain_queue=False)
    returned = asyncio.run(staff.set_availability(StaffAvailabilityRequest(staff_id=LENA.id)))
    assert returned.staff.availability_status == "Available"
    assert returned.assigned == []

    assigned = asyncio.run(booking.assign_from_queue(QueueAssignRequest(appointment_id=second.appointment.id)))
    assert assigned.success is True
    assert assigned.staff_name == "Lena Fischer"
    assert assigned.message == 'Appointment for "Ben" assigned to Lena Fischer from queue'
    assert _queue_positions(booking) == [(first.appointment.id, 1), (third.appointment.id, 2)]

    drained = asyncio.run(booking.drain_queue(QueueDrainRequest()))
    assert [item.id for item in drained.assigned] == [first.appointment.id]
    assert [(item.id, item.queue_position) for item in drained.remaining] == [(third.appointment.id, 1)]
    assert _queue_positions(booking) == [(third.appointment.id, 1)]


def test_leave_requeues_upcoming_and_return_drains_queue(store: InMemoryStore) -> None:
    past = Appointment(
        id="apt-past",
        owner_id=OWNER,
        customer_name="Old",
        service_id=HAIRCUT.id,
        staff_id=PRIYA.id,
        appointment_date=YESTERDAY,
        appointment_time="09:00",
    )
    today = past.model_copy(update={"id": "apt-today", "customer_name": "Now", "appointment_date": TODAY, "appointment_time": 600})
    later = past.model_copy(update={"id": "apt-later", "customer_name": "Soon", "appointment_date": TOMORROW, "appointment_time": 660})
    asyncio.run(store.commit(OWNER, ChangeSet(appointments=[past, today, later])))
    staff = _staff(store)
    booking = _booking(store)

    away = asyncio.run(staff.set_availability(StaffAvailabilityRequest(staff_id=PRIYA.id)))

    assert away.staff.availability_status == "On Leave"
    assert away.description == "Priya Nair status changed to On Leave"
    assert [(item.id, item.queue_position) for item in away.requeued] == [("apt-today", 1), ("apt-later", 2)]
    assert _queue_positions(booking) == [("apt-today", 1), ("apt-later", 2)]
    snapshot = asyncio.run(store.load_snapshot(OWNER))
    assert snapshot.appointment("apt-past").staff_id == PRIYA.id
    activity = asyncio.run(store.recent_activity(OWNER, 2))
    assert [(entry.action_type, entry.description) for entry in activity] == [
        ("staff_availability_changed", "Priya Nair status changed to On Leave"),
        ("appointment_queued", "2 upcoming appointment(s) moved to the queue"),
    ]

    back = asyncio.run(staff.set_availability(StaffAvailabilityRequest(staff_id=PRIYA.id)))

    assert back.staff.availability_status == "Available"
    assert [item.id for item in back.assigned] == ["apt-today", "apt-later"]
    assert all(item.staff_id == PRIYA.id for item in back.assigned)
    assert _queue_positions(booking) == []


def test_deleting_staff_moves_upcoming_bookings_to_queue(store: InMemoryStore) -> None:
    booking = _booking(store)
    first = _book(booking, "Ana", "09:00", staff_id=PRIYA.id)
    _book(booking, "Ben", "10:00", staff_id=PRIYA.id, appointment_date=TOMORROW)
    staff = _staff(store)

    response = asyncio.run(staff.delete(StaffDeleteRequest(staff_id=PRIYA.id)))

    assert response.description == 'Staff member "Priya Nair" deleted (appointments moved to queue)'
    assert len(response.requeued) == 2
    assert _queue_positions(booking)[0] == (first.appointment.id, 1)
    activity = asyncio.run(store.recent_activity(OWNER, 2))
    assert [entry.action_type for entry in activity] == ["staff_deleted", "appointment_queued"]
    assert activity[1].description == "2 upcoming appointment(s) moved to the queue"

    listing = asyncio.run(staff.list_with_load(StaffListRequest()))
    assert listing.date == TODAY
    assert [row.staff.id for row in listing.items] == [MARCO.id, LENA.id]


def test_staff_create_update_and_known_types(store: InMemoryStore) -> None:
    staff = _staff(store)

    created = asyncio.run(
        staff.create(StaffCreateRequest(name="  Omar Haddad ", service_type="Barber", daily_capacity=5))
    )
    assert created.staff.id == "STF-00001"
    assert created.staff.name == "Omar Haddad"
    assert created.description == 'Staff member "Omar Haddad" created'

    updated = asyncio.run(staff.update(StaffUpdateRequest(staff_id=created.staff.id, daily_capacity=6)))
    assert updated.staff.daily_capacity == 6
    assert updated.staff.service_type == "Barber"

    types = asyncio.run(staff.known_types())
    assert types.types == ["Barber", "Stylist", "Therapist"]


def test_catalog_lifecycle_records_activity(store: InMemoryStore) -> None:
    catalog = CatalogService(store, default_owner_id=OWNER)

    created = asyncio.run(
        catalog.create(ServiceCreateRequest(name="Beard Trim", duration=15, required_staff_type="Barber"))
    )
    updated = asyncio.run(catalog.update(ServiceUpdateRequest(service_id=created.id, duration=30)))
    assert updated.duration == 30
    assert updated.name == "Beard Trim"

    asyncio.run(catalog.delete(ServiceDeleteRequest(service_id=created.id)))
    listing = asyncio.run(catalog.list(ServiceListRequest()))
    assert [item.id for item in listing.items] == [HAIRCUT.id, MASSAGE.id]

    activity = asyncio.run(store.recent_activity(OWNER, 10))
    assert [entry.action_type for entry in activity] == ["service_deleted", "service_updated", "service_created"]


def test_list_and_dashboard_summary(store: InMemoryStore) -> None:
    booking = _booking(store)
    first = _book(booking, "Ana", "09:00")
    _book(booking, "Ben", "10:00")
    _book(booking, "Cai", "11:00")
    _book(booking, "Dee", "12:00")
    _book(booking, "Eve", "08:00", appointment_date=TOMORROW, service_id=MASSAGE.id)
    asyncio.run(booking.set_status(AppointmentStatusRequest(appointment_id=first.appointment.id, status="Completed")))

    listing = asyncio.run(booking.list(AppointmentListRequest(appointment_date=TODAY)))
    assert listing.total == 4
    assert [item.customer_name for item in listing.items] == ["Dee", "Cai", "Ben", "Ana"]

    dashboard = DashboardService(store, default_owner_id=OWNER, clock=_today, recent_activity_limit=3)
    summary = asyncio.run(dashboard.summary(DashboardRequest()))

    assert summary.date == TODAY
    assert summary.total_appointments == 4
    assert summary.completed == 1
    assert summary.pending == 3
    assert summary.queue_length == 2
    assert [(row.staff.id, row.load) for row in summary.staff_loads] == [
        (PRIYA.id, 2),
        (MARCO.id, 1),
        (LENA.id, 0),
    ]
    assert len(summary.recent_activity) == 3
    assert summary.recent_activity[0].action_type == "appointment_status_updated"


def test_reads_for_unknown_owner_leave_store_untouched(store: InMemoryStore) -> None:
    service = _booking(store)

    listing = asyncio.run(service.list(AppointmentListRequest(owner_id="nobody")))
    activity = asyncio.run(store.recent_activity("nobody", 5))

    assert listing.total == 0
    assert activity == []
    assert "nobody" not in store._owners


def test_returning_staff_leaves_past_queue_entries_queued(store: InMemoryStore) -> None:
    stale = Appointment(
        id="apt-stale",
        owner_id=OWNER,
        customer_name="Late",
        service_id=MASSAGE.id,
        appointment_date=YESTERDAY,
        appointment_time="09:00",
        in_queue=True,
        queue_position=1,
    )
    fresh = stale.model_copy(update={"id": "apt-fresh", "appointment_date": TODAY, "queue_position": 2})
    asyncio.run(store.commit(OWNER, ChangeSet(appointments=[stale, fresh])))
    booking = _booking(store)

    back = asyncio.run(_staff(store).set_availability(StaffAvailabilityRequest(staff_id=LENA.id)))

    assert [item.id for item in back.assigned] == ["apt-fresh"]
    assert _queue_positions(booking) == [("apt-stale", 1)]
