# ============================================================================
# app/services/appointment/appointment_service.py
# Appointment lifecycle - no FastAPI dependencies, fully testable
# ============================================================================
"""Service for managing appointments after they are booked"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.models.appointment import Appointment, AppointmentStatus, CancelledBy, LIVE_STATUSES, can_transition
from app.models.business import Business
from app.services.exceptions import NotFoundError, BadRequestError, ConflictError
from app.services.notification.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

REMINDER_WINDOW_START = timedelta(hours=23)
REMINDER_WINDOW_END = timedelta(hours=25)


class AppointmentService:
    """Handles appointment status transitions and lookups"""

    @staticmethod
    def get_by_token(db: Session, cancellation_token: str) -> Appointment:
        appointment = db.query(Appointment).filter(
            Appointment.cancellation_token == cancellation_token
        ).first()
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    @staticmethod
    def cancel_by_token(
            db: Session,
            cancellation_token: str,
            reason: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Customer self-service cancellation.

        Already cancelled -> ConflictError. Completed or already started -> BadRequestError.
        """
        now = now or datetime.now()
        try:
            appointment = db.query(Appointment).filter(
                Appointment.cancellation_token == cancellation_token
            ).with_for_update(of=Appointment).first()
            if not appointment:
                raise NotFoundError("Appointment not found")

            if appointment.status == AppointmentStatus.CANCELLED:
                raise ConflictError("Appointment is already cancelled")

            if appointment.status == AppointmentStatus.COMPLETED:
                raise BadRequestError("Cannot cancel a completed appointment")

            if appointment.appointment_datetime < now:
                raise BadRequestError("Cannot cancel a past appointment")

            AppointmentService._mark_cancelled(appointment, CancelledBy.CUSTOMER, reason, now)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Appointment {appointment.id} cancelled by customer")
        NotificationDispatcher.send_cancellation_email(appointment)
        return appointment

    @staticmethod
    def update_status(
            db: Session,
            business: Business,
            appointment_id,
            new_status: AppointmentStatus,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Business-initiated status change.

        The owner may set any status; only ownership of the appointment is checked.
        """
        now = now or datetime.now()
        try:
            appointment = db.query(Appointment).filter(
                Appointment.id == appointment_id,
                Appointment.business_id == business.id
            ).with_for_update(of=Appointment).first()
            if not appointment:
                raise NotFoundError("Appointment not found")

            previous = appointment.status
            if previous != new_status and not can_transition(previous, new_status):
                logger.warning(
                    f"Appointment {appointment.id} moved off the usual lifecycle: "
                    f"{previous.value} -> {new_status.value}"
                )

            if new_status == AppointmentStatus.CANCELLED:
                if previous != AppointmentStatus.CANCELLED:
                    AppointmentService._mark_cancelled(appointment, CancelledBy.BUSINESS, None, now)
            else:
                appointment.status = new_status
                if new_status == AppointmentStatus.CONFIRMED and not appointment.confirmed_at:
                    appointment.confirmed_at = now

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Appointment {appointment.id} status {previous.value} -> {new_status.value}")

        if new_status == AppointmentStatus.CANCELLED and previous != AppointmentStatus.CANCELLED:
            NotificationDispatcher.send_cancellation_email(appointment)
        return appointment

    @staticmethod
    def list_for_business(
            db: Session,
            business: Business,
            start: Optional[datetime] = None,
            end: Optional[datetime] = None
    ) -> List[Appointment]:
        """Appointments of the business in [start, end], oldest first"""
        if start and end and end < start:
            raise BadRequestError("End must not be before start")

        query = db.query(Appointment).filter(Appointment.business_id == business.id)
        if start:
            query = query.filter(Appointment.appointment_datetime >= start)
        if end:
            query = query.filter(Appointment.appointment_datetime <= end)
        return query.order_by(Appointment.appointment_datetime.asc()).all()

    @staticmethod
    def find_live_in_date_range(db: Session, business_id, start_date: date, end_date: date) -> List[Appointment]:
        """
        Non-cancelled appointments whose date falls in [start_date, end_date].

        Shared by the holiday preview and the holiday cascade so both always agree.
        """
        return db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.appointment_datetime >= datetime.combine(start_date, time.min),
            Appointment.appointment_datetime < datetime.combine(end_date + timedelta(days=1), time.min),
            Appointment.status != AppointmentStatus.CANCELLED
        ).order_by(Appointment.appointment_datetime.asc()).all()

    @staticmethod
    def cancel_for_business(
            appointments: List[Appointment],
            reason: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> None:
        """Bulk-cancel inside the caller's transaction"""
        now = now or datetime.now()
        for appointment in appointments:
            AppointmentService._mark_cancelled(appointment, CancelledBy.BUSINESS, reason, now)

    @staticmethod
    def claim_due_reminders(db: Session, now: Optional[datetime] = None) -> List[Appointment]:
        """
        Live appointments starting 23 to 25 hours from now that have not been reminded yet.

        They are stamped with reminder_sent_at and committed before any email is
        queued, so overlapping hourly runs never remind the same appointment twice.
        """
        now = now or datetime.now()
        try:
            due = db.query(Appointment).filter(
                Appointment.status.in_(list(LIVE_STATUSES)),
                Appointment.appointment_datetime >= now + REMINDER_WINDOW_START,
                Appointment.appointment_datetime <= now + REMINDER_WINDOW_END,
                Appointment.reminder_sent_at.is_(None)
            ).order_by(Appointment.appointment_datetime.asc()).with_for_update(of=Appointment).all()

            for appointment in due:
                appointment.reminder_sent_at = now
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Claimed {len(due)} appointment reminders")
        return due

    @staticmethod
    def complete_past_confirmed(db: Session, now: Optional[datetime] = None) -> int:
        """Mark CONFIRMED appointments that have ended as COMPLETED; returns how many"""
        now = now or datetime.now()
        try:
            started = db.query(Appointment).filter(
                Appointment.status == AppointmentStatus.CONFIRMED,
                Appointment.appointment_datetime < now
            ).with_for_update(of=Appointment).all()

            finished = [appointment for appointment in started if appointment.end_datetime <= now]
            for appointment in finished:
                appointment.status = AppointmentStatus.COMPLETED
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Auto-completed {len(finished)} appointments")
        return len(finished)

    @staticmethod
    def _mark_cancelled(appointment: Appointment, cancelled_by: CancelledBy, reason: Optional[str], now: datetime):
        appointment.status = AppointmentStatus.CANCELLED
        appointment.cancelled_by = cancelled_by
        appointment.cancelled_at = now
        if reason:
            appointment.cancellation_reason = reason
