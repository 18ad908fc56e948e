# ============================================================================
# FILE: app/api/v1/dashboard/schedules.py
# Business-authenticated weekly hours and exceptions
# ============================================================================
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.api.dependencies import get_current_business
from app.config.database import get_db
from app.models.business import Business
from app.schemas.schedule import (
    WeeklyScheduleRequest,
    ScheduleEntryResponse,
    ScheduleExceptionRequest,
    ScheduleExceptionResponse,
)
from app.services.schedule.schedule_service import ScheduleService

router = APIRouter(prefix="/schedules", tags=["dashboard-schedules"])


@router.get("", response_model=List[ScheduleEntryResponse])
def get_weekly_schedule(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    return ScheduleService.get_weekly_schedule(db, business)


@router.put("", response_model=List[ScheduleEntryResponse])
def update_weekly_schedule(
        request: WeeklyScheduleRequest,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Set the open hours of the listed weekdays"""
    return ScheduleService.replace_weekly_schedule(db, business, request)


@router.get("/exceptions", response_model=List[ScheduleExceptionResponse])
def list_schedule_exceptions(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    return ScheduleService.list_exceptions(db, business)


@router.post("/exceptions", response_model=ScheduleExceptionResponse, status_code=status.HTTP_201_CREATED)
def add_schedule_exception(
        request: ScheduleExceptionRequest,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Close the business for one day"""
    return ScheduleService.add_exception(db, business, request)


@router.delete("/exceptions/{exception_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule_exception(
        exception_id: UUID = Path(...),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    ScheduleService.delete_exception(db, business, exception_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
