# app/schemas/__init__.py
from .availability import AvailabilityResponse, TimeSlotResponse

from .appointment import (
    CustomerInfo,
    AppointmentRequest,
    CancelAppointmentRequest,
    AppointmentResponse,
    AppointmentStatusResponse,
)

from .holiday import HolidayRequest, HolidayResponse

from .schedule import (
    ScheduleEntryRequest,
    WeeklyScheduleRequest,
    ScheduleEntryResponse,
    ScheduleExceptionRequest,
    ScheduleExceptionResponse,
)

__all__ = [
    "AvailabilityResponse",
    "TimeSlotResponse",
    "CustomerInfo",
    "AppointmentRequest",
    "CancelAppointmentRequest",
    "AppointmentResponse",
    "AppointmentStatusResponse",
    "HolidayRequest",
    "HolidayResponse",
    "ScheduleEntryRequest",
    "WeeklyScheduleRequest",
    "ScheduleEntryResponse",
    "ScheduleExceptionRequest",
    "ScheduleExceptionResponse",
]
