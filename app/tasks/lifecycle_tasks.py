# ===== app/tasks/lifecycle_tasks.py =====
"""Periodic appointment housekeeping, driven by Celery beat"""
import logging

from app.config.celery_config import celery_app
from app.config.database import SessionLocal
from app.services.appointment.appointment_service import AppointmentService
from app.services.notification.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)


@celery_app.task
def send_appointment_reminders():
    """Hourly: queue a reminder for every live appointment about a day away"""
    db = SessionLocal()
    try:
        due = AppointmentService.claim_due_reminders(db)
    finally:
        db.close()

    for appointment in due:
        NotificationDispatcher.send_appointment_reminder(appointment)

    return {"status": "success", "reminders": len(due)}


@celery_app.task
def auto_complete_appointments():
    """Daily: CONFIRMED appointments that have ended become COMPLETED"""
    db = SessionLocal()
    try:
        completed = AppointmentService.complete_past_confirmed(db)
    finally:
        db.close()

    return {"status": "success", "completed": completed}
