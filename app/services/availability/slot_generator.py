# app/services/availability/slot_generator.py
"""Turns an open-hours window into bookable slots for one service"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List

from app.models.appointment import Appointment, AppointmentStatus, intervals_overlap
from app.services.schedule.schedule_calendar import DayResolution


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime
    available: bool

    @property
    def start_time(self) -> time:
        return self.start.time()

    @property
    def end_time(self) -> time:
        return self.end.time()


def generate_slots(
        open_day: DayResolution,
        service_duration_minutes: int,
        day: date,
        now: datetime,
        existing_appointments: Iterable[Appointment]
) -> List[TimeSlot]:
    """
    Generate slots for `day` in chronological order.

    Candidate starts step by the day's slot increment; a slot is kept while it
    ends at or before closing time. Past slots on today and slots overlapping a
    non-cancelled appointment are returned with available=False.
    """
    if not open_day or day < now.date():
        return []

    duration = timedelta(minutes=service_duration_minutes)
    step = timedelta(minutes=open_day.slot_increment)
    window_end = datetime.combine(day, open_day.end_time)

    blocking = [
        (appt.appointment_datetime, appt.end_datetime)
        for appt in existing_appointments
        if appt.status != AppointmentStatus.CANCELLED
    ]
    is_today = day == now.date()

    slots = []
    current = datetime.combine(day, open_day.start_time)
    while current + duration <= window_end:
        slot_end = current + duration

        is_past = is_today and current.time() < now.time()
        is_taken = any(
            intervals_overlap(current, slot_end, appt_start, appt_end)
            for appt_start, appt_end in blocking
        )

        slots.append(TimeSlot(start=current, end=slot_end, available=not (is_past or is_taken)))
        current += step

    return slots
