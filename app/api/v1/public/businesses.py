# app/api/v1/public/businesses.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.schemas.holiday import HolidayResponse
from app.services.holiday.holiday_service import HolidayService

router = APIRouter(prefix="/businesses", tags=["public-businesses"])


@router.get("/{business_slug}/holidays", response_model=List[HolidayResponse])
def get_business_holidays(
        business_slug: str = Path(..., description="Public business slug"),
        db: Session = Depends(get_db)
):
    """Upcoming closures, for the customer booking page"""
    return HolidayService.list_public_holidays(db, business_slug)
