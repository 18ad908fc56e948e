from datetime import date, datetime, time, timedelta

from app.models import Appointment, AppointmentStatus
from app.models.appointment import intervals_overlap
from app.services.availability.slot_generator import generate_slots
from app.services.schedule.schedule_calendar import CLOSED, OpenDay

MONDAY = date(2025, 6, 9)
BEFORE_MONDAY = datetime(2025, 6, 1, 8, 0)
NINE_TO_FIVE = OpenDay(start_time=time(9, 0), end_time=time(17, 0), slot_increment=30)


def appointment_at(hour, minute=0, duration=60, status=AppointmentStatus.CONFIRMED, day=MONDAY):
    return Appointment(
        appointment_datetime=datetime.combine(day, time(hour, minute)),
        duration_minutes=duration,
        status=status,
    )


def starts(slots):
    return [slot.start_time for slot in slots]


def test_slots_step_by_increment_until_closing():
    slots = generate_slots(NINE_TO_FIVE, 60, MONDAY, BEFORE_MONDAY, [])

    assert slots[0].start_time == time(9, 0)
    assert slots[0].end_time == time(10, 0)
    assert slots[-1].end_time == time(17, 0)
    assert len(slots) == 15
    assert all(slot.available for slot in slots)
    for previous, current in zip(slots, slots[1:]):
        assert current.start - previous.start == timedelta(minutes=30)


def test_every_slot_has_service_duration_and_fits_the_window():
    for duration in (15, 45, 60, 90, 480):
        window_end = datetime.combine(MONDAY, NINE_TO_FIVE.end_time)
        for slot in generate_slots(NINE_TO_FIVE, duration, MONDAY, BEFORE_MONDAY, []):
            assert slot.end - slot.start == timedelta(minutes=duration)
            assert slot.end <= window_end


def test_closed_day_has_no_slots():
    assert generate_slots(CLOSED, 60, MONDAY, BEFORE_MONDAY, []) == []


def test_past_dates_have_no_slots():
    now = datetime(2025, 6, 10, 8, 0)
    for days_back in range(1, 30):
        assert generate_slots(NINE_TO_FIVE, 60, now.date() - timedelta(days=days_back), now, []) == []


def test_service_longer_than_window_yields_nothing():
    assert generate_slots(NINE_TO_FIVE, 9 * 60, MONDAY, BEFORE_MONDAY, []) == []


def test_existing_appointment_blocks_overlapping_slots_only():
    slots = generate_slots(NINE_TO_FIVE, 60, MONDAY, BEFORE_MONDAY, [appointment_at(10)])
    availability = {slot.start_time: slot.available for slot in slots}

    assert availability[time(9, 0)] is True
    assert availability[time(9, 30)] is False
    assert availability[time(10, 0)] is False
    assert availability[time(10, 30)] is False
    assert availability[time(11, 0)] is True


def test_cancelled_appointments_never_block():
    cancelled = appointment_at(10, status=AppointmentStatus.CANCELLED)

    slots = generate_slots(NINE_TO_FIVE, 60, MONDAY, BEFORE_MONDAY, [cancelled])

    assert all(slot.available for slot in slots)


def test_unavailable_slots_are_returned_not_dropped():
    slots = generate_slots(NINE_TO_FIVE, 60, MONDAY, BEFORE_MONDAY, [appointment_at(10)])

    assert len(slots) == 15
    assert starts(slots) == sorted(starts(slots))


def test_slots_already_started_today_are_unavailable():
    now = datetime.combine(MONDAY, time(11, 15))

    slots = generate_slots(NINE_TO_FIVE, 60, MONDAY, now, [])
    availability = {slot.start_time: slot.available for slot in slots}

    assert availability[time(11, 0)] is False
    assert availability[time(11, 30)] is True
    assert not any(slot.available for slot in slots if slot.start_time < time(11, 15))


def test_slot_increment_is_independent_of_duration():
    open_day = OpenDay(start_time=time(9, 0), end_time=time(11, 0), slot_increment=15)

    slots = generate_slots(open_day, 60, MONDAY, BEFORE_MONDAY, [])

    assert starts(slots) == [time(9, 0), time(9, 15), time(9, 30), time(9, 45), time(10, 0)]


def test_touching_intervals_do_not_overlap():
    nine = datetime(2025, 6, 9, 9, 0)
    ten = datetime(2025, 6, 9, 10, 0)
    eleven = datetime(2025, 6, 9, 11, 0)

    assert not intervals_overlap(nine, ten, ten, eleven)
    assert not intervals_overlap(ten, eleven, nine, ten)
    assert intervals_overlap(nine, ten + timedelta(minutes=1), ten, eleven)
