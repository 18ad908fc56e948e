# app/services/availability/availability_service.py
from typing import Dict, List, Optional
from datetime import date, datetime, time, timedelta
from sqlalchemy.orm import Session
import logging

from app.models.appointment import Appointment, AppointmentStatus
from app.models.business import Business
from app.models.service import Service
from app.services.availability.slot_generator import generate_slots, TimeSlot
from app.services.exceptions import NotFoundError, BadRequestError
from app.services.schedule.schedule_calendar import ScheduleCalendar

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Public availability queries"""

    @staticmethod
    def get_business_by_slug(db: Session, business_slug: str) -> Business:
        business = db.query(Business).filter(Business.slug == business_slug).first()
        if not business:
            raise NotFoundError("Business not found")
        return business

    @staticmethod
    def get_bookable_service(db: Session, business: Business, service_id) -> Service:
        """Service owned by the business; inactive services cannot be booked or queried"""
        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business.id
        ).first()
        if not service:
            raise NotFoundError("Service not found")
        if not service.is_active:
            raise BadRequestError("Service is not active")
        return service

    @staticmethod
    def get_day_appointments(db: Session, business_id, day: date) -> List[Appointment]:
        """Non-cancelled appointments that can reach into `day` (including ones started the evening before)"""
        day_start = datetime.combine(day, time.min)
        return db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.appointment_datetime >= day_start - timedelta(days=1),
            Appointment.appointment_datetime < day_start + timedelta(days=1),
            Appointment.status != AppointmentStatus.CANCELLED
        ).order_by(Appointment.appointment_datetime.asc()).all()

    @staticmethod
    def get_slots(
            db: Session,
            business_slug: str,
            service_id,
            day: date,
            now: Optional[datetime] = None
    ) -> List[TimeSlot]:
        """Resolve business, service and the day's hours, then generate slots"""
        now = now or datetime.now()
        logger.info(f"Getting availability for business: {business_slug}, service: {service_id}, date: {day}")

        business = AvailabilityService.get_business_by_slug(db, business_slug)
        service = AvailabilityService.get_bookable_service(db, business, service_id)

        if day < now.date():
            return []

        open_day = ScheduleCalendar.resolve_day(db, business.id, day)
        if not open_day:
            return []

        existing = AvailabilityService.get_day_appointments(db, business.id, day)
        slots = generate_slots(open_day, service.duration_minutes, day, now, existing)

        available_count = sum(1 for slot in slots if slot.available)
        logger.info(f"Generated {len(slots)} total slots, {available_count} available for date {day}")
        return slots

    @staticmethod
    def get_availability(
            db: Session,
            business_slug: str,
            service_id,
            day: date,
            now: Optional[datetime] = None
    ) -> Dict:
        slots = AvailabilityService.get_slots(db, business_slug, service_id, day, now=now)
        return {
            "date": day,
            "slots": [
                {"start_time": slot.start_time, "end_time": slot.end_time, "available": slot.available}
                for slot in slots
            ]
        }
