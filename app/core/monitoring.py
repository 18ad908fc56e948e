"""Liveness and dependency health endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.redis import get_redis
from app.config.settings import get_settings

health_router = APIRouter()


@health_router.get("")
async def health_check():
    """Liveness probe; touches no dependency"""
    return {"status": "healthy", "service": "booking-api"}


@health_router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Probe the database and Redis.

    Redis backs the notification broker and the optional schedule cache, so an
    outage degrades the service without stopping bookings.
    """
    settings = get_settings()
    checks = {
        "database": "unknown",
        "redis": "unknown",
        "schedule_cache": "enabled" if settings.SCHEDULE_CACHE_ENABLED else "disabled",
        "notifications": "enabled" if settings.NOTIFICATIONS_ENABLED else "disabled",
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {e}"

    try:
        get_redis().ping()
        checks["redis"] = "healthy"
    except Exception as e:
        checks["redis"] = f"unhealthy: {e}"

    if checks["database"] != "healthy":
        checks["overall"] = "unhealthy"
    elif checks["redis"] != "healthy":
        checks["overall"] = "degraded"
    else:
        checks["overall"] = "healthy"

    return checks
