"""
Pydantic schemas for weekly hours and schedule exceptions
"""
from pydantic import Field, model_validator
from typing import List, Optional
from datetime import date, time
from uuid import UUID

from app.schemas.base import CamelModel


class ScheduleEntryRequest(CamelModel):
    """Open hours for one weekday (0=Monday, 6=Sunday)"""
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: time
    end_time: time
    slot_duration_minutes: int = Field(default=30, gt=0, le=480)
    is_active: bool = True

    @model_validator(mode='after')
    def check_window(self):
        if self.end_time <= self.start_time:
            raise ValueError('end_time must be after start_time')
        return self


class WeeklyScheduleRequest(CamelModel):
    entries: List[ScheduleEntryRequest]

    @model_validator(mode='after')
    def check_unique_days(self):
        days = [entry.day_of_week for entry in self.entries]
        if len(days) != len(set(days)):
            raise ValueError('Each day_of_week may appear only once')
        return self


class ScheduleEntryResponse(CamelModel):
    id: UUID
    day_of_week: int
    start_time: time
    end_time: time
    slot_duration_minutes: int
    is_active: bool


class ScheduleExceptionRequest(CamelModel):
    exception_date: date
    reason: Optional[str] = Field(None, max_length=500)


class ScheduleExceptionResponse(CamelModel):
    id: UUID
    exception_date: date
    reason: Optional[str] = None
