# ============================================================================
# app/services/appointment/booking_service.py
# Conflict-free public booking - no FastAPI dependencies
# ============================================================================
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from app.models.appointment import Appointment, AppointmentStatus, generate_cancellation_token
from app.models.business import Business
from app.schemas.appointment import AppointmentRequest
from app.services.availability.availability_service import AvailabilityService
from app.services.customer.customer_service import CustomerService
from app.services.exceptions import BadRequestError, ConflictError
from app.services.notification.notification_service import NotificationDispatcher
from app.services.schedule.schedule_calendar import ScheduleCalendar

logger = logging.getLogger(__name__)


class BookingService:
    """Creates appointments so that no two live bookings of a business overlap"""

    @staticmethod
    def lock_business(db: Session, business_id) -> Business:
        """
        Take the per-business write lock for the rest of the transaction.

        Every writer that can create or cancel appointments for this business
        (bookings, holiday creation) goes through this row first, so their
        check-then-write sequences run one at a time per business.
        """
        return db.query(Business).filter(Business.id == business_id).with_for_update().one()

    @staticmethod
    def find_conflicts(
            db: Session,
            business_id,
            start: datetime,
            end: datetime
    ) -> List[Appointment]:
        """Live appointments of the business overlapping [start, end)"""
        longest = db.query(func.max(Appointment.duration_minutes)).filter(
            Appointment.business_id == business_id,
            Appointment.status != AppointmentStatus.CANCELLED
        ).scalar()
        if not longest:
            return []

        # An appointment starting before `start - longest` has ended by `start`
        candidates = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.status != AppointmentStatus.CANCELLED,
            Appointment.appointment_datetime >= start - timedelta(minutes=longest),
            Appointment.appointment_datetime < end
        ).all()

        return [appt for appt in candidates if appt.overlaps(start, end)]

    @staticmethod
    def _check_business_hours(db: Session, business_id, start: datetime, end: datetime) -> None:
        open_day = ScheduleCalendar.resolve_day(db, business_id, start.date(), use_cache=False)
        if not open_day:
            raise BadRequestError("Business is closed on the requested date")

        window_start = datetime.combine(start.date(), open_day.start_time)
        window_end = datetime.combine(start.date(), open_day.end_time)
        if start < window_start or end > window_end:
            raise BadRequestError("Requested time is outside business hours")

    @staticmethod
    def create_appointment(
            db: Session,
            business_slug: str,
            request: AppointmentRequest,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Validate and insert a PENDING appointment in one transaction.

        Raises NotFoundError, BadRequestError or ConflictError. BadRequestError
        also covers a closed day or a time outside opening hours, re-checked
        under the business lock. On any failure the transaction is rolled back
        and nothing is written. The confirmation email is queued only after commit.
        """
        now = now or datetime.now()

        try:
            business = AvailabilityService.get_business_by_slug(db, business_slug)
            if not business.is_active:
                raise BadRequestError("Business is not accepting bookings")

            service = AvailabilityService.get_bookable_service(db, business, request.service_id)

            requested_start = request.appointment_datetime
            if requested_start <= now:
                raise BadRequestError("Cannot book appointment in the past")

            requested_end = requested_start + timedelta(minutes=service.duration_minutes)

            BookingService.lock_business(db, business.id)

            # Re-read under the lock: holidays or exceptions may have landed since the page loaded
            BookingService._check_business_hours(db, business.id, requested_start, requested_end)

            conflicts = BookingService.find_conflicts(db, business.id, requested_start, requested_end)
            if conflicts:
                logger.info(
                    f"Booking conflict for business {business.id} at {requested_start}: "
                    f"{[str(appt.id) for appt in conflicts]}"
                )
                raise ConflictError("This time slot is no longer available")

            customer = CustomerService.find_or_create_customer(db, business, request.customer)

            appointment = Appointment(
                business_id=business.id,
                service_id=service.id,
                customer_id=customer.id,
                appointment_datetime=requested_start,
                duration_minutes=service.duration_minutes,
                price=service.price,
                status=AppointmentStatus.PENDING,
                notes=request.notes,
                cancellation_token=generate_cancellation_token(),
            )
            db.add(appointment)

            customer.total_appointments = (customer.total_appointments or 0) + 1
            customer.last_appointment_at = now

            db.commit()

        except Exception:
            db.rollback()
            raise

        logger.info(f"Appointment {appointment.id} booked for business {business.id} at {requested_start}")

        NotificationDispatcher.send_booking_confirmation(appointment)
        return appointment
