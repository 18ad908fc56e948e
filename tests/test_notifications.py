from datetime import datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.services.appointment.appointment_service import AppointmentService
from app.services.appointment.booking_service import BookingService
from app.services.email.email_service import EmailService
from app.services.notification import notification_service
from app.services.notification.notification_service import NotificationDispatcher
from app.tasks import email_tasks

from conftest import booking_request

NOW = datetime(2025, 6, 1, 12, 0)


class RecordingTask:
    name = "tests.recording"

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def apply_async(self, args=None, retry=True, **options):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.calls.append((tuple(args), retry))


@pytest.fixture
def notifications_on(monkeypatch):
    monkeypatch.setattr(notification_service, "get_settings", lambda: SimpleNamespace(NOTIFICATIONS_ENABLED=True))


def test_enqueue_passes_string_id_without_publish_retry(notifications_on):
    task = RecordingTask()
    appointment_id = uuid4()

    NotificationDispatcher._enqueue(task, appointment_id)

    assert task.calls == [((str(appointment_id),), False)]


def test_broker_failure_is_logged_not_raised(notifications_on, caplog):
    NotificationDispatcher._enqueue(RecordingTask(fail=True), uuid4())

    assert "Failed to enqueue" in caplog.text


def test_disabled_notifications_skip_the_queue(monkeypatch):
    monkeypatch.setattr(notification_service, "get_settings", lambda: SimpleNamespace(NOTIFICATIONS_ENABLED=False))
    task = RecordingTask()

    NotificationDispatcher._enqueue(task, uuid4())

    assert task.calls == []


def test_booking_survives_notification_failure(db, business, service, monkeypatch, notifications_on):
    monkeypatch.undo()
    monkeypatch.setattr(notification_service, "get_settings", lambda: SimpleNamespace(NOTIFICATIONS_ENABLED=True))
    monkeypatch.setattr(email_tasks.send_booking_confirmation_email, "apply_async", RecordingTask(fail=True).apply_async)

    appointment = BookingService.create_appointment(
        db, business.slug, booking_request(service.id, datetime(2025, 6, 9, 10, 0)), now=NOW
    )

    assert appointment.id is not None


def test_confirmation_task_sends_email(db, session_factory, business, service, monkeypatch):
    appointment = BookingService.create_appointment(
        db, business.slug, booking_request(service.id, datetime(2025, 6, 9, 10, 0)), now=NOW
    )
    sent = []
    monkeypatch.setattr(email_tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(
        EmailService, "send_booking_confirmation",
        staticmethod(lambda appt, business_name: sent.append((appt.id, business_name)) or True)
    )

    result = email_tasks.send_booking_confirmation_email.run(str(appointment.id))

    assert result == {"status": "success", "appointment_id": str(appointment.id)}
    assert sent == [(appointment.id, business.name)]


def test_task_for_missing_appointment_reports_failure(session_factory, monkeypatch):
    monkeypatch.setattr(email_tasks, "SessionLocal", session_factory)

    result = email_tasks.send_cancellation_email.run(str(uuid4()))

    assert result["status"] == "failed"


def test_reminder_task_sends_email(db, session_factory, business, service, monkeypatch):
    appointment = BookingService.create_appointment(
        db, business.slug, booking_request(service.id, datetime(2025, 6, 9, 10, 0)), now=NOW
    )
    sent = []
    monkeypatch.setattr(email_tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(
        EmailService, "send_appointment_reminder",
        staticmethod(lambda appt, business_name: sent.append((appt.id, business_name)) or True)
    )

    result = email_tasks.send_appointment_reminder_email.run(str(appointment.id))

    assert result == {"status": "success", "appointment_id": str(appointment.id)}
    assert sent == [(appointment.id, business.name)]


def test_reminder_task_skips_cancelled_appointment(db, session_factory, business, service, monkeypatch):
    appointment = BookingService.create_appointment(
        db, business.slug, booking_request(service.id, datetime(2025, 6, 9, 10, 0)), now=NOW
    )
    AppointmentService.cancel_by_token(db, appointment.cancellation_token, now=NOW)
    sent = []
    monkeypatch.setattr(email_tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(
        EmailService, "send_appointment_reminder",
        staticmethod(lambda appt, business_name: sent.append(appt.id) or True)
    )

    result = email_tasks.send_appointment_reminder_email.run(str(appointment.id))

    assert result["status"] == "skipped"
    assert sent == []


def test_reminder_email_links_to_manage_page(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        EmailService, "send_email",
        staticmethod(lambda to_email, subject, html_content, plain_text=None: captured.update(
            to=to_email, subject=subject, text=plain_text
        ) or True)
    )
    appointment = SimpleNamespace(
        customer=SimpleNamespace(email="ada@example.com", first_name="Ada", last_name="Lovelace"),
        service=SimpleNamespace(name="Haircut", duration_minutes=60),
        appointment_datetime=datetime(2025, 6, 9, 10, 0),
        cancellation_token="tok123",
    )

    assert EmailService.send_appointment_reminder(appointment, "Sunset Salon")
    assert captured["to"] == "ada@example.com"
    assert captured["subject"] == "Reminder: your appointment with Sunset Salon"
    assert "tok123" in captured["text"]
