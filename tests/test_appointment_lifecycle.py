from datetime import datetime, timedelta

import pytest

from app.models import AppointmentStatus, CancelledBy
from app.models.appointment import ALLOWED_TRANSITIONS, TERMINAL_STATUSES, can_transition
from app.services.appointment.appointment_service import AppointmentService
from app.services.appointment.booking_service import BookingService
from app.services.exceptions import BadRequestError, ConflictError, NotFoundError

from conftest import add_business, booking_request

NOW = datetime(2025, 6, 1, 12, 0)
MONDAY_TEN = datetime(2025, 6, 9, 10, 0)


@pytest.fixture
def appointment(db, business, service, notifications):
    booked = BookingService.create_appointment(db, business.slug, booking_request(service.id, MONDAY_TEN), now=NOW)
    notifications["confirmations"].clear()
    return booked


def test_transition_table():
    assert can_transition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)
    assert can_transition(AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW)
    assert not can_transition(AppointmentStatus.PENDING, AppointmentStatus.COMPLETED)
    assert TERMINAL_STATUSES == {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW}
    assert set(ALLOWED_TRANSITIONS) == set(AppointmentStatus)


def test_get_by_token(db, appointment):
    assert AppointmentService.get_by_token(db, appointment.cancellation_token).id == appointment.id

    with pytest.raises(NotFoundError):
        AppointmentService.get_by_token(db, "not-a-real-token")


def test_customer_cancels_upcoming_appointment(db, appointment, notifications):
    cancelled = AppointmentService.cancel_by_token(
        db, appointment.cancellation_token, reason="Feeling unwell", now=NOW
    )

    assert cancelled.status == AppointmentStatus.CANCELLED
    assert cancelled.cancelled_by == CancelledBy.CUSTOMER
    assert cancelled.cancellation_reason == "Feeling unwell"
    assert cancelled.cancelled_at == NOW
    assert notifications["cancellations"] == [appointment.id]


def test_cancelling_twice_conflicts(db, appointment, notifications):
    AppointmentService.cancel_by_token(db, appointment.cancellation_token, now=NOW)

    for _ in range(3):
        with pytest.raises(ConflictError):
            AppointmentService.cancel_by_token(db, appointment.cancellation_token, now=NOW)

    assert len(notifications["cancellations"]) == 1


def test_cancelling_completed_appointment_is_rejected(db, business, appointment):
    AppointmentService.update_status(db, business, appointment.id, AppointmentStatus.COMPLETED, now=NOW)

    with pytest.raises(BadRequestError, match="completed"):
        AppointmentService.cancel_by_token(db, appointment.cancellation_token, now=NOW)


def test_cancelling_past_appointment_is_rejected(db, appointment):
    with pytest.raises(BadRequestError, match="past"):
        AppointmentService.cancel_by_token(db, appointment.cancellation_token, now=MONDAY_TEN + timedelta(minutes=5))

    db.refresh(appointment)
    assert appointment.status == AppointmentStatus.PENDING


def test_unknown_token_is_not_found(db, appointment):
    with pytest.raises(NotFoundError):
        AppointmentService.cancel_by_token(db, "missing", now=NOW)


def test_business_confirms_appointment(db, business, appointment):
    updated = AppointmentService.update_status(db, business, appointment.id, AppointmentStatus.CONFIRMED, now=NOW)

    assert updated.status == AppointmentStatus.CONFIRMED
    assert updated.confirmed_at == NOW


def test_business_status_update_is_unconditional(db, business, appointment):
    for status in (AppointmentStatus.NO_SHOW, AppointmentStatus.PENDING, AppointmentStatus.COMPLETED):
        updated = AppointmentService.update_status(db, business, appointment.id, status, now=NOW)
        assert updated.status == status


def test_business_cancellation_notifies_customer(db, business, appointment, notifications):
    updated = AppointmentService.update_status(db, business, appointment.id, AppointmentStatus.CANCELLED, now=NOW)

    assert updated.status == AppointmentStatus.CANCELLED
    assert updated.cancelled_by == CancelledBy.BUSINESS
    assert notifications["cancellations"] == [appointment.id]


def test_other_business_cannot_touch_appointment(db, appointment):
    intruder = add_business(db, slug="intruder")

    with pytest.raises(NotFoundError):
        AppointmentService.update_status(db, intruder, appointment.id, AppointmentStatus.CONFIRMED, now=NOW)


def test_list_for_business_filters_by_range(db, business, service, appointment):
    later = BookingService.create_appointment(
        db, business.slug, booking_request(service.id, MONDAY_TEN + timedelta(days=1), email="b@example.com"), now=NOW
    )

    everything = AppointmentService.list_for_business(db, business)
    monday_only = AppointmentService.list_for_business(
        db, business, MONDAY_TEN.replace(hour=0), MONDAY_TEN.replace(hour=23)
    )

    assert [a.id for a in everything] == [appointment.id, later.id]
    assert [a.id for a in monday_only] == [appointment.id]

    with pytest.raises(BadRequestError):
        AppointmentService.list_for_business(db, business, MONDAY_TEN, MONDAY_TEN - timedelta(days=1))
