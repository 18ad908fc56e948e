# app/models/schedule.py
from sqlalchemy import Column, String, Integer, Boolean, Time, Date, DateTime, ForeignKey, Uuid, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class WeeklySchedule(Base):
    """Recurring open hours for one day of the week"""
    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_schedules_business_day"),
        CheckConstraint("end_time > start_time", name="ck_schedules_end_after_start"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Monday, 6=Sunday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    slot_duration_minutes = Column(Integer, default=30)

    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<WeeklySchedule(business_id={self.business_id}, day={self.day_of_week})>"


class ScheduleException(Base):
    """A single day on which the business is closed regardless of weekly hours"""
    __tablename__ = "schedule_exceptions"
    __table_args__ = (
        UniqueConstraint("business_id", "exception_date", name="uq_schedule_exceptions_business_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    exception_date = Column(Date, nullable=False)
    reason = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
