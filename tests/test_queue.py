import random
from datetime import date

import pytest

from staffqueue.engine.cascade import cascade_removal
from staffqueue.engine.queue import assign_from_queue, dequeue, drain_queue, enqueue, queued_in_order
from staffqueue.schemas.entities import Appointment, Service, StaffMember


OWNER = "owner-1"
TODAY = date(2025, 9, 6)
YESTERDAY = date(2025, 9, 5)
TOMORROW = date(2025, 9, 7)

HAIRCUT = Service(id="srv-hair", owner_id=OWNER, name="Haircut", duration=30, required_staff_type="Stylist")
SERVICES = [HAIRCUT]


def _staff(staff_id: str, *, capacity: int = 2, status: str = "Available") -> StaffMember:
    return StaffMember(
        id=staff_id,
        owner_id=OWNER,
        name=staff_id.title(),
        service_type="Stylist",
        daily_capacity=capacity,
        availability_status=status,
    )


def _booked(appointment_id: str, staff_id: str, time: str, *, day: date = TODAY, status: str = "Scheduled") -> Appointment:
    return Appointment(
        id=appointment_id,
        owner_id=OWNER,
        customer_name=f"Customer {appointment_id}",
        service_id=HAIRCUT.id,
        staff_id=staff_id,
        appointment_date=day,
        appointment_time=time,
        status=status,
    )


def _queued(appointment_id: str, position: int, time: str = "09:00", *, day: date = TODAY) -> Appointment:
    return Appointment(
        id=appointment_id,
        owner_id=OWNER,
        customer_name=f"Customer {appointment_id}",
        service_id=HAIRCUT.id,
        appointment_date=day,
        appointment_time=time,
        in_queue=True,
        queue_position=position,
    )


def _positions(appointments) -> list:
    return [(item.id, item.queue_position) for item in appointments]


def test_enqueue_starts_at_one_and_appends() -> None:
    assert enqueue([]) == 1
    assert enqueue([_booked("a1", "s1", "09:00")]) == 1
    assert enqueue([_queued("q1", 1), _queued("q2", 2)]) == 3


def test_queue_order_and_dequeue_renumbering() -> None:
    appointments = [_queued("q3", 3), _queued("q1", 1), _queued("q2", 2), _booked("a1", "s1", "09:00")]

    assert [item.id for item in queued_in_order(appointments)] == ["q1", "q2", "q3"]
    assert _positions(dequeue(appointments, "q2")) == [("q1", 1), ("q3", 2)]
    assert _positions(dequeue(appointments, "q1")) == [("q2", 1), ("q3", 2)]


def test_assign_from_queue_resolves_first_bookable_staff() -> None:
    appointments = [_queued("q1", 1), _queued("q2", 2, "11:00"), _queued("q3", 3, "13:00")]
    staff = [_staff("off", status="On Leave"), _staff("priya")]

    result = assign_from_queue(appointments, staff, SERVICES, "q2")

    assert result.success is True
    assert result.changed
    assert result.staff_id == "priya"
    assert result.appointment.staff_id == "priya"
    assert result.appointment.in_queue is False
    assert result.appointment.queue_position is None
    assert _positions(result.renumbered) == [("q1", 1), ("q3", 2)]
    assert result.description == 'Appointment for "Customer q2" assigned to Priya from queue'


def test_assign_from_queue_without_capacity_leaves_queue_untouched() -> None:
    appointments = [
        _booked("a1", "priya", "08:00"),
        _booked("a2", "priya", "10:00"),
        _queued("q1", 1),
    ]

    result = assign_from_queue(appointments, [_staff("priya")], SERVICES, "q1")

    assert result.success is False
    assert result.changed == []
    assert result.reason == "No available staff members to assign this appointment."
    assert result.renumbered == []


def test_assign_from_queue_measures_load_on_booking_date() -> None:
    appointments = [
        _booked("a1", "priya", "08:00"),
        _booked("a2", "priya", "10:00"),
        _queued("q1", 1, day=TOMORROW),
    ]

    assert assign_from_queue(appointments, [_staff("priya")], SERVICES, "q1").success is True
    assert assign_from_queue(appointments, [_staff("priya")], SERVICES, "q1", TODAY).success is False


def test_assign_from_queue_rejects_unknown_or_unqueued() -> None:
    appointments = [_booked("a1", "priya", "08:00")]
    staff = [_staff("priya")]

    assert assign_from_queue(appointments, staff, SERVICES, "missing").reason == "Appointment not found"
    assert assign_from_queue(appointments, staff, SERVICES, "a1").reason == "Appointment is not in the queue"


def test_drain_queue_fills_capacity_in_queue_order() -> None:
    appointments = [_queued("q1", 1, "09:00"), _queued("q2", 2, "10:00"), _queued("q3", 3, "11:00")]

    result = drain_queue(appointments, [_staff("priya", capacity=2)], SERVICES)

    assert result.changed
    assert [item.id for item in result.assigned] == ["q1", "q2"]
    assert all(item.staff_id == "priya" for item in result.assigned)
    assert _positions(result.remaining) == [("q3", 1)]
    assert len(result.descriptions) == 2


def test_drain_queue_with_nobody_free_changes_nothing() -> None:
    result = drain_queue([_queued("q1", 1)], [_staff("priya", status="On Leave")], SERVICES)

    assert result.changed == []
    assert result.assigned == []
    assert result.remaining == []


def test_cascade_moves_only_upcoming_scheduled_bookings() -> None:
    appointments = [
        _booked("past", "s1", "09:00", day=YESTERDAY),
        _booked("done", "s1", "09:00", status="Completed"),
        _booked("late", "s1", "15:00", day=TOMORROW),
        _booked("early", "s1", "10:00"),
        _booked("other", "s2", "10:00"),
        _queued("q1", 1),
    ]

    result = cascade_removal(appointments, "s1", TODAY)

    assert _positions(result.to_requeue) == [("early", 2), ("late", 3)]
    assert all(item.staff_id is None and item.in_queue for item in result.to_requeue)
    assert result.description == "2 upcoming appointment(s) moved to the queue"


def test_cascade_with_nothing_upcoming_is_empty() -> None:
    appointments = [_booked("past", "s1", "09:00", day=YESTERDAY)]

    result = cascade_removal(appointments, "s1", TODAY)

    assert result.to_requeue == []
    assert result.description is None


@pytest.mark.parametrize("seed", [0, 1, 7, 42])
def test_queue_positions_stay_contiguous_over_mixed_operations(seed: int) -> None:
    rng = random.Random(seed)
    queue = []

    for step in range(60):
        if queue and rng.random() < 0.4:
            removed = rng.choice(queue).id
            queue = dequeue(queue, removed)
        else:
            queue.append(_queued(f"q{step}", enqueue(queue)))

        positions = sorted(item.queue_position for item in queue)
        assert positions == list(range(1, len(queue) + 1))


def test_drain_queue_skips_entries_dated_before_today() -> None:
    appointments = [_queued("stale", 1, day=YESTERDAY), _queued("fresh", 2, "10:00")]

    result = drain_queue(appointments, [_staff("priya")], SERVICES, TODAY)

    assert [item.id for item in result.assigned] == ["fresh"]
    assert _positions(result.remaining) == [("stale", 1)]
