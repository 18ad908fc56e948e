# app/services/schedule/schedule_service.py
"""Weekly hours and single-day exceptions for the authenticated business"""
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.models.business import Business
from app.models.schedule import WeeklySchedule, ScheduleException
from app.schemas.schedule import WeeklyScheduleRequest, ScheduleExceptionRequest
from app.services.cache.schedule_cache import ScheduleCache
from app.services.exceptions import NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class ScheduleService:
    """Handles schedule writes; every write invalidates the cached days of the business"""

    @staticmethod
    def get_weekly_schedule(db: Session, business: Business) -> List[WeeklySchedule]:
        return db.query(WeeklySchedule).filter(
            WeeklySchedule.business_id == business.id
        ).order_by(WeeklySchedule.day_of_week.asc()).all()

    @staticmethod
    def replace_weekly_schedule(db: Session, business: Business, request: WeeklyScheduleRequest) -> List[WeeklySchedule]:
        """Upsert one entry per listed weekday; weekdays not listed are left as they are"""
        try:
            existing = {
                entry.day_of_week: entry
                for entry in ScheduleService.get_weekly_schedule(db, business)
            }
            for item in request.entries:
                entry = existing.get(item.day_of_week)
                if entry is None:
                    entry = WeeklySchedule(business_id=business.id, day_of_week=item.day_of_week)
                    db.add(entry)
                entry.start_time = item.start_time
                entry.end_time = item.end_time
                entry.slot_duration_minutes = item.slot_duration_minutes
                entry.is_active = item.is_active
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Weekly schedule updated for business {business.id}: days {[e.day_of_week for e in request.entries]}")
        ScheduleCache.invalidate_business(business.id)
        return ScheduleService.get_weekly_schedule(db, business)

    @staticmethod
    def list_exceptions(db: Session, business: Business) -> List[ScheduleException]:
        return db.query(ScheduleException).filter(
            ScheduleException.business_id == business.id
        ).order_by(ScheduleException.exception_date.asc()).all()

    @staticmethod
    def add_exception(db: Session, business: Business, request: ScheduleExceptionRequest) -> ScheduleException:
        exception = ScheduleException(
            business_id=business.id,
            exception_date=request.exception_date,
            reason=request.reason,
        )
        try:
            db.add(exception)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("An exception already exists for this date", cause=e)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Schedule exception added for business {business.id} on {request.exception_date}")
        ScheduleCache.invalidate_business(business.id)
        return exception

    @staticmethod
    def delete_exception(db: Session, business: Business, exception_id) -> None:
        try:
            exception = db.query(ScheduleException).filter(
                ScheduleException.id == exception_id,
                ScheduleException.business_id == business.id
            ).first()
            if not exception:
                raise NotFoundError("Schedule exception not found")
            db.delete(exception)
            db.commit()
        except Exception:
            db.rollback()
            raise

        ScheduleCache.invalidate_business(business.id)
