# app/models/__init__.py
from .base import Base
from .business import Business
from .service import Service
from .schedule import WeeklySchedule, ScheduleException
from .holiday import BusinessHoliday
from .customer import Customer
from .appointment import Appointment, AppointmentStatus, CancelledBy

__all__ = [
    "Base",
    "Business",
    "Service",
    "WeeklySchedule",
    "ScheduleException",
    "BusinessHoliday",
    "Customer",
    "Appointment",
    "AppointmentStatus",
    "CancelledBy",
]
