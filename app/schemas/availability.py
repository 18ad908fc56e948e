"""
Pydantic schemas for public availability queries
"""
import datetime as dt
from typing import List

from app.schemas.base import CamelModel


class TimeSlotResponse(CamelModel):
    start_time: dt.time
    end_time: dt.time
    available: bool


class AvailabilityResponse(CamelModel):
    date: dt.date
    slots: List[TimeSlotResponse]
