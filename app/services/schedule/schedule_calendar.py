# app/services/schedule/schedule_calendar.py
"""Resolves whether a business is open on a given date and with which hours"""
from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union
from sqlalchemy.orm import Session
import logging

from app.config.settings import get_settings
from app.models.holiday import BusinessHoliday
from app.models.schedule import WeeklySchedule, ScheduleException
from app.services.cache.schedule_cache import ScheduleCache, CLOSED_MARKER, encode_time, decode_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenDay:
    """Open-hours window for one calendar date"""
    start_time: time
    end_time: time
    slot_increment: int


class _Closed:
    def __repr__(self):
        return "CLOSED"

    def __bool__(self):
        return False


CLOSED = _Closed()

DayResolution = Union[OpenDay, _Closed]


class ScheduleCalendar:
    """Folds holidays, single-day exceptions and weekly hours into one answer per date"""

    @staticmethod
    def resolve_day(db: Session, business_id, day: date, use_cache: bool = True) -> DayResolution:
        """
        Resolve one date for one business.

        Priority: holiday period, then schedule exception, then the weekly entry
        for day.weekday(). A missing or inactive weekly entry means closed.
        Writers pass use_cache=False so they never act on a stale answer.
        """
        if not use_cache:
            return ScheduleCalendar._resolve_uncached(db, business_id, day)

        # Read the generation before the database so a concurrent change lands in a newer one
        generation = ScheduleCache.generation(business_id)
        if generation is None:
            return ScheduleCalendar._resolve_uncached(db, business_id, day)

        cached = ScheduleCache.get(business_id, day, generation)
        if cached is not None:
            return ScheduleCalendar._from_cache(cached)

        resolution = ScheduleCalendar._resolve_uncached(db, business_id, day)
        ScheduleCache.set(business_id, day, generation, ScheduleCalendar._to_cache(resolution))
        return resolution

    @staticmethod
    def _resolve_uncached(db: Session, business_id, day: date) -> DayResolution:
        if ScheduleCalendar.is_holiday(db, business_id, day):
            logger.info(f"Business {business_id} is on holiday on {day}")
            return CLOSED

        has_exception = db.query(ScheduleException.id).filter(
            ScheduleException.business_id == business_id,
            ScheduleException.exception_date == day
        ).first() is not None
        if has_exception:
            logger.info(f"Business {business_id} is closed on {day} due to exception")
            return CLOSED

        schedule = db.query(WeeklySchedule).filter(
            WeeklySchedule.business_id == business_id,
            WeeklySchedule.day_of_week == day.weekday()
        ).first()

        if schedule is None or not schedule.is_active:
            logger.info(f"No active schedule for business {business_id} on weekday {day.weekday()}")
            return CLOSED

        increment = schedule.slot_duration_minutes
        if not increment or increment <= 0:
            increment = get_settings().DEFAULT_SLOT_DURATION_MINUTES

        return OpenDay(
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            slot_increment=increment,
        )

    @staticmethod
    def is_holiday(db: Session, business_id, day: date) -> bool:
        """Check if a date falls inside any holiday period of the business"""
        return db.query(BusinessHoliday.id).filter(
            BusinessHoliday.business_id == business_id,
            BusinessHoliday.start_date <= day,
            BusinessHoliday.end_date >= day
        ).first() is not None

    @staticmethod
    def _to_cache(resolution: DayResolution) -> dict:
        if not resolution:
            return {"state": CLOSED_MARKER}
        return {
            "state": "open",
            "start_time": encode_time(resolution.start_time),
            "end_time": encode_time(resolution.end_time),
            "slot_increment": resolution.slot_increment,
        }

    @staticmethod
    def _from_cache(payload: dict) -> DayResolution:
        if payload.get("state") == CLOSED_MARKER:
            return CLOSED
        return OpenDay(
            start_time=decode_time(payload["start_time"]),
            end_time=decode_time(payload["end_time"]),
            slot_increment=int(payload["slot_increment"]),
        )
