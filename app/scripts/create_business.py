#!/usr/bin/env python3
"""
Script to create a demo business with services and weekly hours
Usage: python -m app.scripts.create_business [slug]
"""
import sys
from datetime import time
from decimal import Decimal
from sqlalchemy.orm import Session

from app.api.dependencies import create_access_token
from app.config.database import SessionLocal, create_tables
from app.models.business import Business
from app.models.schedule import WeeklySchedule
from app.models.service import Service


def create_business_with_hours(slug: str = "sunset-salon"):
    """Create a demo business open Monday to Friday, 09:00-17:00"""
    create_tables()
    db: Session = SessionLocal()

    try:
        existing = db.query(Business).filter(Business.slug == slug).first()
        if existing:
            print(f"Business '{slug}' already exists (id={existing.id})")
            return existing

        business = Business(name="Sunset Salon", slug=slug, email="owner@sunset-salon.example", is_active=True)
        db.add(business)
        db.flush()

        services = [
            ("Haircut", 30, Decimal("25.00")),
            ("Colouring", 90, Decimal("80.00")),
            ("Consultation", 60, Decimal("0.00")),
        ]
        for order, (name, duration, price) in enumerate(services):
            db.add(Service(
                business_id=business.id,
                name=name,
                duration_minutes=duration,
                price=price,
                is_active=True,
                display_order=order,
            ))

        for day in range(5):
            db.add(WeeklySchedule(
                business_id=business.id,
                day_of_week=day,
                start_time=time(9, 0),
                end_time=time(17, 0),
                slot_duration_minutes=30,
                is_active=True,
            ))

        db.commit()
        print(f"Created business '{business.name}' (id={business.id}, slug={business.slug})")

        token = create_access_token({"business_id": str(business.id)})
        print(f"Owner access token:\n{token}")
        return business

    except Exception as e:
        db.rollback()
        print(f"Error creating business: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_business_with_hours(*sys.argv[1:2])
