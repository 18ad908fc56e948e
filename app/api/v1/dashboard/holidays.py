# ============================================================================
# FILE: app/api/v1/dashboard/holidays.py
# Business-authenticated holiday endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, Response, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List
from uuid import UUID
import logging

from app.api.dependencies import get_current_business
from app.config.database import get_db
from app.models.business import Business
from app.schemas.holiday import HolidayRequest, HolidayResponse
from app.services.holiday.holiday_service import HolidayService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/holidays", tags=["dashboard-holidays"])


@router.get("", response_model=List[HolidayResponse])
def list_holidays(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """All holiday periods of your business"""
    return HolidayService.list_holidays(db, business)


@router.get("/upcoming", response_model=List[HolidayResponse])
def list_upcoming_holidays(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Holiday periods ending today or later"""
    return HolidayService.list_upcoming_holidays(db, business.id)


@router.get("/affected-appointments", response_model=List[UUID])
def preview_affected_appointments(
        start: date = Query(..., description="First day of the holiday"),
        end: date = Query(..., description="Last day of the holiday (inclusive)"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Ids of the appointments a holiday over [start, end] would cancel"""
    return HolidayService.get_affected_appointments(db, business, start, end)


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
def create_holiday(
        request: HolidayRequest,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Create a holiday; appointments inside it are cancelled"""
    logger.info(f"POST /holidays - {request.start_date} to {request.end_date}")
    return HolidayService.create_holiday(db, business, request)


@router.put("/{holiday_id}", response_model=HolidayResponse)
def update_holiday(
        request: HolidayRequest,
        holiday_id: UUID = Path(...),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Move or resize a holiday; appointments on its new days are cancelled"""
    return HolidayService.update_holiday(db, business, holiday_id, request)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holiday(
        holiday_id: UUID = Path(...),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    HolidayService.delete_holiday(db, business, holiday_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
