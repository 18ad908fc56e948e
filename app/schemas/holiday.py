"""
Pydantic schemas for holiday periods
"""
from pydantic import Field
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from app.schemas.base import CamelModel


class HolidayRequest(CamelModel):
    start_date: date
    end_date: date
    reason: Optional[str] = Field(None, max_length=500)


class HolidayResponse(CamelModel):
    id: UUID
    start_date: date
    end_date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
