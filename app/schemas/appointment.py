"""
Pydantic schemas for bookings and appointment management
"""
from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from app.models.appointment import AppointmentStatus
from app.schemas.base import CamelModel


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class CustomerInfo(CamelModel):
    """Contact details supplied by the person booking"""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator('first_name', 'last_name')
    @classmethod
    def strip_names(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name must not be blank')
        return v


class AppointmentRequest(CamelModel):
    """Public booking request"""
    service_id: UUID
    appointment_datetime: datetime
    customer: CustomerInfo
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator('appointment_datetime')
    @classmethod
    def drop_timezone(cls, v: datetime):
        # Bookings run on the business-local clock
        return v.replace(tzinfo=None, microsecond=0)


class CancelAppointmentRequest(CamelModel):
    cancellation_reason: Optional[str] = Field(None, max_length=500)


# ============================================================================
# Response Schemas
# ============================================================================

class ServiceInfo(CamelModel):
    id: UUID
    name: str
    duration_minutes: int
    price: Decimal


class CustomerSummary(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None


class AppointmentResponse(CamelModel):
    id: UUID
    appointment_datetime: datetime
    duration_minutes: int
    price: Decimal
    status: AppointmentStatus
    notes: Optional[str] = None
    cancellation_token: str
    service: ServiceInfo
    customer: CustomerSummary
    created_at: Optional[datetime] = None


class AppointmentStatusResponse(CamelModel):
    id: UUID
    status: AppointmentStatus
    message: str
