# ============================================================================
# app/api/v1/public/booking.py
# Public booking and self-service cancellation - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, Body, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.config.database import get_db
from app.schemas.appointment import (
    AppointmentRequest,
    AppointmentResponse,
    AppointmentStatusResponse,
    CancelAppointmentRequest,
)
from app.services.appointment.appointment_service import AppointmentService
from app.services.appointment.booking_service import BookingService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/booking", tags=["public-booking"])


@router.post("/{business_slug}", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
        request: AppointmentRequest,
        business_slug: str = Path(..., description="Public business slug"),
        db: Session = Depends(get_db)
):
    """
    Book a slot.

    - 404: unknown business, or service not offered by it
    - 400: start not in the future, inactive business or service, or the
      requested interval falls on a closed day (weekly hours, exception,
      holiday) or outside that day's opening hours
    - 409: the slot was taken in the meantime; reload availability and resubmit
    """
    appointment = BookingService.create_appointment(
        db=db,
        business_slug=business_slug,
        request=request
    )
    return AppointmentResponse.model_validate(appointment)


@router.get("/appointment/{cancellation_token}", response_model=AppointmentResponse)
def get_appointment(
        cancellation_token: str = Path(..., max_length=64),
        db: Session = Depends(get_db)
):
    """Appointment details for the holder of the cancellation token"""
    appointment = AppointmentService.get_by_token(db, cancellation_token)
    return AppointmentResponse.model_validate(appointment)


@router.post("/cancel/{cancellation_token}", response_model=AppointmentStatusResponse)
def cancel_appointment(
        cancellation_token: str = Path(..., max_length=64),
        request: Optional[CancelAppointmentRequest] = Body(None),
        db: Session = Depends(get_db)
):
    """Cancel an upcoming appointment with its token"""
    appointment = AppointmentService.cancel_by_token(
        db=db,
        cancellation_token=cancellation_token,
        reason=request.cancellation_reason if request else None
    )
    return AppointmentStatusResponse(
        id=appointment.id,
        status=appointment.status,
        message="Appointment cancelled"
    )
