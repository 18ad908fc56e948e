# app/services/notification/notification_service.py
"""Fire-and-forget customer notifications"""
import logging
from typing import Iterable

from app.config.settings import get_settings
from app.models.appointment import Appointment
from app.tasks import email_tasks

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Enqueues notification tasks after a transaction has committed.

    Never raises: a broker outage is logged and the caller carries on.
    Publishing does not retry, so a dead broker costs one failed connect
    rather than kombu's retry loop on the request thread.
    """

    @staticmethod
    def _enqueue(task, appointment_id) -> None:
        if not get_settings().NOTIFICATIONS_ENABLED:
            logger.debug(f"Notifications disabled, skipping {task.name} for {appointment_id}")
            return
        try:
            task.apply_async(args=[str(appointment_id)], retry=False)
        except Exception as e:
            logger.error(f"Failed to enqueue {task.name} for appointment {appointment_id}: {e}")

    @staticmethod
    def send_booking_confirmation(appointment: Appointment) -> None:
        NotificationDispatcher._enqueue(email_tasks.send_booking_confirmation_email, appointment.id)

    @staticmethod
    def send_cancellation_email(appointment: Appointment) -> None:
        NotificationDispatcher._enqueue(email_tasks.send_cancellation_email, appointment.id)

    @staticmethod
    def send_cancellation_emails(appointments: Iterable[Appointment]) -> None:
        for appointment in appointments:
            NotificationDispatcher.send_cancellation_email(appointment)

    @staticmethod
    def send_appointment_reminder(appointment: Appointment) -> None:
        NotificationDispatcher._enqueue(email_tasks.send_appointment_reminder_email, appointment.id)
