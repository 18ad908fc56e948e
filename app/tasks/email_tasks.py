# ===== app/tasks/email_tasks.py =====
import logging
from uuid import UUID

from app.config.celery_config import celery_app
from app.config.database import SessionLocal
from app.models.appointment import Appointment, LIVE_STATUSES
from app.models.business import Business
from app.services.email.email_service import EmailService

logger = logging.getLogger(__name__)


def _load_appointment(db, appointment_id: str):
    appointment = db.query(Appointment).filter(Appointment.id == UUID(appointment_id)).first()
    if not appointment:
        return None, None
    business = db.query(Business).filter(Business.id == appointment.business_id).first()
    return appointment, business


@celery_app.task(bind=True, max_retries=3)
def send_booking_confirmation_email(self, appointment_id: str):
    """
    Send booking confirmation to the customer

    Args:
        appointment_id: Appointment ID (string UUID)
    """
    db = SessionLocal()
    try:
        appointment, business = _load_appointment(db, appointment_id)
        if not appointment:
            logger.error(f"Appointment {appointment_id} not found")
            return {"status": "failed", "reason": "appointment_not_found"}

        logger.info(f"Sending booking confirmation for appointment {appointment_id}")
        EmailService.send_booking_confirmation(appointment, business.name)

        logger.info(f"Booking confirmation sent for appointment {appointment_id}")
        return {"status": "success", "appointment_id": appointment_id}

    except Exception as exc:
        logger.error(f"Failed to send booking confirmation for {appointment_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def send_cancellation_email(self, appointment_id: str):
    """
    Send cancellation notice to the customer

    Args:
        appointment_id: Appointment ID (string UUID)
    """
    db = SessionLocal()
    try:
        appointment, business = _load_appointment(db, appointment_id)
        if not appointment:
            logger.error(f"Appointment {appointment_id} not found")
            return {"status": "failed", "reason": "appointment_not_found"}

        logger.info(f"Sending cancellation email for appointment {appointment_id}")
        EmailService.send_cancellation_email(appointment, business.name)

        logger.info(f"Cancellation email sent for appointment {appointment_id}")
        return {"status": "success", "appointment_id": appointment_id}

    except Exception as exc:
        logger.error(f"Failed to send cancellation email for {appointment_id}: {exc}")

        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def send_appointment_reminder_email(self, appointment_id: str):
    """
    Send the day-before reminder to the customer

    Args:
        appointment_id: Appointment ID (string UUID)
    """
    db = SessionLocal()
    try:
        appointment, business = _load_appointment(db, appointment_id)
        if not appointment:
            logger.error(f"Appointment {appointment_id} not found")
            return {"status": "failed", "reason": "appointment_not_found"}

        if appointment.status not in LIVE_STATUSES:
            logger.info(f"Skipping reminder for {appointment.status.value} appointment {appointment_id}")
            return {"status": "skipped", "appointment_id": appointment_id}

        EmailService.send_appointment_reminder(appointment, business.name)

        logger.info(f"Reminder sent for appointment {appointment_id}")
        return {"status": "success", "appointment_id": appointment_id}

    except Exception as exc:
        logger.error(f"Failed to send reminder for {appointment_id}: {exc}")

        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()
