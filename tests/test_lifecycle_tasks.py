from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from celery.schedules import crontab

from app.config.celery_config import celery_app
from app.models import Appointment, AppointmentStatus, Customer
from app.models.appointment import generate_cancellation_token
from app.services.appointment.appointment_service import AppointmentService
from app.tasks import lifecycle_tasks

NOW = datetime(2025, 6, 9, 8, 0)


@pytest.fixture
def customer(db, business):
    customer = Customer(business_id=business.id, first_name="Ada", last_name="Lovelace", email="ada@example.com")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture
def add_appointment(db, business, service, customer):
    """Insert an appointment directly, bypassing opening hours and overlap checks"""

    def _add(start, status=AppointmentStatus.PENDING, duration=60):
        appointment = Appointment(
            business_id=business.id,
            service_id=service.id,
            customer_id=customer.id,
            appointment_datetime=start,
            duration_minutes=duration,
            price=Decimal("40.00"),
            status=status,
            cancellation_token=generate_cancellation_token(),
        )
        db.add(appointment)
        db.commit()
        return appointment

    return _add


def test_reminders_cover_appointments_about_a_day_away(db, add_appointment):
    too_soon = add_appointment(NOW + timedelta(hours=22))
    window_start = add_appointment(NOW + timedelta(hours=23))
    tomorrow = add_appointment(NOW + timedelta(hours=24), status=AppointmentStatus.CONFIRMED)
    window_end = add_appointment(NOW + timedelta(hours=25))
    too_late = add_appointment(NOW + timedelta(hours=26))
    cancelled = add_appointment(NOW + timedelta(hours=24, minutes=30), status=AppointmentStatus.CANCELLED)

    due = AppointmentService.claim_due_reminders(db, now=NOW)

    assert [a.id for a in due] == [window_start.id, tomorrow.id, window_end.id]
    assert all(a.reminder_sent_at == NOW for a in due)
    for skipped in (too_soon, too_late, cancelled):
        db.refresh(skipped)
        assert skipped.reminder_sent_at is None


def test_reminder_is_claimed_only_once(db, add_appointment):
    add_appointment(NOW + timedelta(hours=24))

    assert len(AppointmentService.claim_due_reminders(db, now=NOW)) == 1
    assert AppointmentService.claim_due_reminders(db, now=NOW + timedelta(minutes=30)) == []


def test_auto_complete_only_finished_confirmed_appointments(db, add_appointment):
    finished = add_appointment(NOW - timedelta(hours=2), status=AppointmentStatus.CONFIRMED)
    in_progress = add_appointment(NOW - timedelta(minutes=30), status=AppointmentStatus.CONFIRMED)
    pending = add_appointment(NOW - timedelta(hours=3))
    upcoming = add_appointment(NOW + timedelta(hours=2), status=AppointmentStatus.CONFIRMED)

    assert AppointmentService.complete_past_confirmed(db, now=NOW) == 1

    for appointment in (finished, in_progress, pending, upcoming):
        db.refresh(appointment)
    assert finished.status == AppointmentStatus.COMPLETED
    assert in_progress.status == AppointmentStatus.CONFIRMED
    assert pending.status == AppointmentStatus.PENDING
    assert upcoming.status == AppointmentStatus.CONFIRMED


def test_reminder_task_dispatches_each_claimed_appointment(add_appointment, session_factory, monkeypatch, notifications):
    start = datetime.now().replace(microsecond=0) + timedelta(hours=24)
    appointment = add_appointment(start)
    monkeypatch.setattr(lifecycle_tasks, "SessionLocal", session_factory)

    result = lifecycle_tasks.send_appointment_reminders.run()

    assert result == {"status": "success", "reminders": 1}
    assert notifications["reminders"] == [appointment.id]


def test_auto_complete_task_reports_count(add_appointment, session_factory, monkeypatch):
    add_appointment(datetime.now() - timedelta(days=1), status=AppointmentStatus.CONFIRMED)
    monkeypatch.setattr(lifecycle_tasks, "SessionLocal", session_factory)

    assert lifecycle_tasks.auto_complete_appointments.run() == {"status": "success", "completed": 1}


def test_beat_schedule_runs_both_jobs():
    schedule = celery_app.conf.beat_schedule

    assert schedule["send-appointment-reminders"]["task"] == "app.tasks.lifecycle_tasks.send_appointment_reminders"
    assert schedule["send-appointment-reminders"]["schedule"] == crontab(minute=0)
    assert schedule["auto-complete-appointments"]["task"] == "app.tasks.lifecycle_tasks.auto_complete_appointments"
