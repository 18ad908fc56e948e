# app/services/holiday/holiday_service.py
"""Holiday periods and the appointment cancellations they cause"""
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.models.business import Business
from app.models.holiday import BusinessHoliday
from app.schemas.holiday import HolidayRequest
from app.services.appointment.appointment_service import AppointmentService
from app.services.appointment.booking_service import BookingService
from app.services.availability.availability_service import AvailabilityService
from app.services.cache.schedule_cache import ScheduleCache
from app.services.exceptions import NotFoundError, BadRequestError, ConflictError
from app.services.notification.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

HOLIDAY_CANCELLATION_REASON = "The business is closed on this date"


class HolidayService:
    """Handles holiday CRUD for the authenticated business"""

    @staticmethod
    def list_holidays(db: Session, business: Business) -> List[BusinessHoliday]:
        return db.query(BusinessHoliday).filter(
            BusinessHoliday.business_id == business.id
        ).order_by(BusinessHoliday.start_date.asc()).all()

    @staticmethod
    def list_upcoming_holidays(db: Session, business_id, today: Optional[date] = None) -> List[BusinessHoliday]:
        today = today or date.today()
        return db.query(BusinessHoliday).filter(
            BusinessHoliday.business_id == business_id,
            BusinessHoliday.end_date >= today
        ).order_by(BusinessHoliday.start_date.asc()).all()

    @staticmethod
    def list_public_holidays(db: Session, business_slug: str, today: Optional[date] = None) -> List[BusinessHoliday]:
        """Upcoming holidays shown on the public booking page"""
        business = AvailabilityService.get_business_by_slug(db, business_slug)
        return HolidayService.list_upcoming_holidays(db, business.id, today)

    @staticmethod
    def get_affected_appointments(db: Session, business: Business, start_date: date, end_date: date) -> List[UUID]:
        """Ids of the appointments a holiday over [start_date, end_date] would cancel"""
        HolidayService._validate_range(start_date, end_date)
        appointments = AppointmentService.find_live_in_date_range(db, business.id, start_date, end_date)
        return [appointment.id for appointment in appointments]

    @staticmethod
    def create_holiday(
            db: Session,
            business: Business,
            request: HolidayRequest,
            now: Optional[datetime] = None
    ) -> BusinessHoliday:
        """
        Create a holiday and cancel every live appointment inside it.

        The insert and the cancellations commit together or not at all.
        """
        now = now or datetime.now()
        HolidayService._validate_range(request.start_date, request.end_date)
        if request.start_date < now.date():
            raise BadRequestError("Cannot create holiday in the past")

        try:
            # Same lock as bookings: no booking can slip in between the cascade and commit
            BookingService.lock_business(db, business.id)

            HolidayService._ensure_no_overlap(db, business.id, request.start_date, request.end_date)

            holiday = BusinessHoliday(
                business_id=business.id,
                start_date=request.start_date,
                end_date=request.end_date,
                reason=request.reason,
            )
            db.add(holiday)

            affected = AppointmentService.find_live_in_date_range(
                db, business.id, request.start_date, request.end_date
            )
            AppointmentService.cancel_for_business(affected, HOLIDAY_CANCELLATION_REASON, now)

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Holiday created for business {business.id}: {request.start_date} to {request.end_date}, "
            f"cancelled {len(affected)} appointments"
        )
        ScheduleCache.invalidate_business(business.id)
        NotificationDispatcher.send_cancellation_emails(affected)
        return holiday

    @staticmethod
    def update_holiday(
            db: Session,
            business: Business,
            holiday_id,
            request: HolidayRequest,
            now: Optional[datetime] = None
    ) -> BusinessHoliday:
        """
        Move, resize or rename a holiday.

        Live appointments on any day of the new range are cancelled in the same
        transaction; days the holiday no longer covers simply reopen.
        """
        now = now or datetime.now()
        HolidayService._validate_range(request.start_date, request.end_date)
        try:
            BookingService.lock_business(db, business.id)

            holiday = HolidayService._get_owned(db, business, holiday_id)
            HolidayService._ensure_no_overlap(
                db, business.id, request.start_date, request.end_date, exclude_id=holiday.id
            )

            holiday.start_date = request.start_date
            holiday.end_date = request.end_date
            holiday.reason = request.reason

            affected = AppointmentService.find_live_in_date_range(
                db, business.id, request.start_date, request.end_date
            )
            AppointmentService.cancel_for_business(affected, HOLIDAY_CANCELLATION_REASON, now)

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Holiday updated: {holiday_id} now {request.start_date} to {request.end_date}, "
            f"cancelled {len(affected)} appointments"
        )
        ScheduleCache.invalidate_business(business.id)
        NotificationDispatcher.send_cancellation_emails(affected)
        return holiday

    @staticmethod
    def delete_holiday(db: Session, business: Business, holiday_id) -> None:
        try:
            holiday = HolidayService._get_owned(db, business, holiday_id)
            db.delete(holiday)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Holiday deleted: {holiday_id}")
        ScheduleCache.invalidate_business(business.id)

    @staticmethod
    def _get_owned(db: Session, business: Business, holiday_id) -> BusinessHoliday:
        holiday = db.query(BusinessHoliday).filter(
            BusinessHoliday.id == holiday_id,
            BusinessHoliday.business_id == business.id
        ).first()
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    @staticmethod
    def _ensure_no_overlap(db: Session, business_id, start_date: date, end_date: date, exclude_id=None) -> None:
        query = db.query(BusinessHoliday).filter(
            BusinessHoliday.business_id == business_id,
            BusinessHoliday.end_date >= start_date,
            BusinessHoliday.start_date <= end_date
        )
        if exclude_id is not None:
            query = query.filter(BusinessHoliday.id != exclude_id)
        if query.first():
            raise ConflictError("Holiday period overlaps with existing holiday")

    @staticmethod
    def _validate_range(start_date: date, end_date: date) -> None:
        if end_date < start_date:
            raise BadRequestError("End date must be after or equal to start date")
