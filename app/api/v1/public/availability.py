# ============================================================================
# app/api/v1/public/availability.py
# Public availability - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from uuid import UUID

from app.config.database import get_db
from app.schemas.availability import AvailabilityResponse
from app.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["public-availability"])


@router.get("/{business_slug}", response_model=AvailabilityResponse)
def get_availability(
        business_slug: str = Path(..., description="Public business slug"),
        service_id: UUID = Query(..., alias="serviceId", description="Service to book"),
        day: date = Query(..., alias="date", description="Calendar date (YYYY-MM-DD)"),
        db: Session = Depends(get_db)
):
    """
    Bookable slots for one service on one date.
    Unavailable slots are included with available=false.
    """
    return AvailabilityService.get_availability(
        db=db,
        business_slug=business_slug,
        service_id=service_id,
        day=day
    )
