# ============================================================================
# FILE: app/api/v1/dashboard/appointments.py
# Business-authenticated appointment endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from app.api.dependencies import get_current_business
from app.config.database import get_db
from app.models.appointment import AppointmentStatus
from app.models.business import Business
from app.schemas.appointment import AppointmentResponse
from app.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


@router.get("", response_model=List[AppointmentResponse])
def list_appointments(
        start: Optional[datetime] = Query(None, description="Appointments starting on or after this moment"),
        end: Optional[datetime] = Query(None, description="Appointments starting on or before this moment"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Get the appointments of your business, oldest first.
    Requires authenticated session.
    """
    appointments = AppointmentService.list_for_business(db, business, start, end)
    return [AppointmentResponse.model_validate(appointment) for appointment in appointments]


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        new_status: AppointmentStatus = Query(..., alias="status"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Confirm, complete, mark no-show or cancel an appointment.
    Requires authenticated session.
    """
    appointment = AppointmentService.update_status(db, business, appointment_id, new_status)
    return AppointmentResponse.model_validate(appointment)
