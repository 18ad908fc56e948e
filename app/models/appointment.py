# app/models/appointment.py
from sqlalchemy import Column, String, Integer, Text, DateTime, Numeric, ForeignKey, Uuid, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from datetime import datetime, timedelta
import enum
import secrets
import uuid
from app.models.base import Base


class AppointmentStatus(str, enum.Enum):
    """Appointment lifecycle states."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


class CancelledBy(str, enum.Enum):
    """Who cancelled an appointment."""
    CUSTOMER = "CUSTOMER"
    BUSINESS = "BUSINESS"


ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    },
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELLED: set(),
    AppointmentStatus.NO_SHOW: set(),
}

LIVE_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED})

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    """Whether the lifecycle graph has an edge current -> target"""
    return target in ALLOWED_TRANSITIONS[current]


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open interval test; touching endpoints do not overlap."""
    return start_a < end_b and start_b < end_a


def generate_cancellation_token() -> str:
    return secrets.token_urlsafe(32)


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_business_datetime", "business_id", "appointment_datetime"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id"), nullable=False, index=True)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)

    # Appointment details (business-local clock)
    appointment_datetime = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(SQLEnum(AppointmentStatus), default=AppointmentStatus.PENDING, nullable=False, index=True)
    cancellation_token = Column(String(64), unique=True, nullable=False, index=True)
    cancellation_reason = Column(Text, nullable=True)
    cancelled_by = Column(SQLEnum(CancelledBy), nullable=True)

    confirmed_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    reminder_sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    service = relationship("Service", viewonly=True, lazy="joined")
    customer = relationship("Customer", viewonly=True, lazy="joined")

    @property
    def end_datetime(self) -> datetime:
        return self.appointment_datetime + timedelta(minutes=self.duration_minutes)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return intervals_overlap(start, end, self.appointment_datetime, self.end_datetime)

    def __repr__(self):
        return f"<Appointment(id={self.id}, at={self.appointment_datetime}, status={self.status})>"
