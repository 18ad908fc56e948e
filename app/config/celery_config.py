# app/config/celery_config.py
"""Celery application configuration"""
from celery import Celery
from celery.schedules import crontab

from app.config.settings import get_settings

settings = get_settings()


def create_celery_app() -> Celery:
    """Create and configure the Celery application"""
    app = Celery(
        "booking",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=["app.tasks.email_tasks", "app.tasks.lifecycle_tasks"],
    )

    app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        result_serializer="json",
        accept_content=["json"],
        task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
        task_acks_late=True,
        worker_prefetch_multiplier=1,
        task_routes={
            "app.tasks.email_tasks.*": {"queue": "notifications"},
            "app.tasks.lifecycle_tasks.*": {"queue": "notifications"},
        },
        result_expires=3600,
        timezone=settings.BUSINESS_TIMEZONE,
        enable_utc=False,
        beat_schedule={
            "send-appointment-reminders": {
                "task": "app.tasks.lifecycle_tasks.send_appointment_reminders",
                "schedule": crontab(minute=0),
            },
            "auto-complete-appointments": {
                "task": "app.tasks.lifecycle_tasks.auto_complete_appointments",
                "schedule": crontab(minute=0, hour=settings.AUTO_COMPLETE_HOUR),
            },
        },
    )

    return app


celery_app = create_celery_app()
