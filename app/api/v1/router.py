"""
API v1 router setup
Organized into: public (no auth) and dashboard (business JWT) routes
"""
from fastapi import APIRouter

from app.api.v1.public import availability, booking, businesses
from app.api.v1.dashboard import appointments, holidays, schedules

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(availability.router, tags=["Public"])
api_v1_router.include_router(booking.router, tags=["Public"])
api_v1_router.include_router(businesses.router, tags=["Public"])

# ============================================================================
# DASHBOARD ROUTES (JWT authentication required)
# ============================================================================
api_v1_router.include_router(appointments.router, tags=["Dashboard"])
api_v1_router.include_router(holidays.router, tags=["Dashboard"])
api_v1_router.include_router(schedules.router, tags=["Dashboard"])


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "JWT Bearer token carrying a business_id claim",
        }
    }
