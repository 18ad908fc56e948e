import os

# The module-level engine is built on import; keep it off Postgres in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULE_CACHE_ENABLED", "false")
os.environ.setdefault("NOTIFICATIONS_ENABLED", "false")

from datetime import time
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.api.dependencies import create_access_token
from app.config.database import build_engine, create_tables, get_db
from app.main import create_app
from app.models import Business, Service, WeeklySchedule
from app.schemas.appointment import AppointmentRequest, CustomerInfo
from app.services.notification.notification_service import NotificationDispatcher


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'booking.db'}")
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def notifications(monkeypatch):
    """Record dispatched notifications instead of enqueueing Celery tasks"""
    sent = {"confirmations": [], "cancellations": [], "reminders": []}

    monkeypatch.setattr(
        NotificationDispatcher,
        "send_booking_confirmation",
        staticmethod(lambda appointment: sent["confirmations"].append(appointment.id)),
    )
    monkeypatch.setattr(
        NotificationDispatcher,
        "send_cancellation_email",
        staticmethod(lambda appointment: sent["cancellations"].append(appointment.id)),
    )
    monkeypatch.setattr(
        NotificationDispatcher,
        "send_appointment_reminder",
        staticmethod(lambda appointment: sent["reminders"].append(appointment.id)),
    )
    return sent


def add_business(db, slug="sunset-salon", open_days=range(5), start=time(9, 0), end=time(17, 0), increment=30):
    business = Business(name=slug.replace("-", " ").title(), slug=slug, email=f"owner@{slug}.example")
    db.add(business)
    db.flush()
    for day in open_days:
        db.add(WeeklySchedule(
            business_id=business.id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            slot_duration_minutes=increment,
            is_active=True,
        ))
    db.commit()
    return business


def add_service(db, business, duration=60, price="40.00", is_active=True, name="Haircut"):
    service = Service(
        business_id=business.id,
        name=name,
        duration_minutes=duration,
        price=Decimal(price),
        is_active=is_active,
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def business(db):
    """Open Monday to Friday, 09:00-17:00, 30 minute increments"""
    return add_business(db)


@pytest.fixture
def service(db, business):
    return add_service(db, business)


def booking_request(service_id, start, email="ada@example.com", first_name="Ada", notes=None):
    return AppointmentRequest(
        service_id=service_id,
        appointment_datetime=start,
        customer=CustomerInfo(first_name=first_name, last_name="Lovelace", email=email, phone="555-0100"),
        notes=notes,
    )


@pytest.fixture
def client(db):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(business):
    token = create_access_token({"business_id": str(business.id)})
    return {"Authorization": f"Bearer {token}"}
