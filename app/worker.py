"""
Celery worker entry point for the notifications queue

    celery -A app.worker worker -Q notifications
    celery -A app.worker beat           # reminders and auto-completion
"""
import logging
from celery.signals import task_failure, task_retry, worker_ready

from app.config.celery_config import celery_app
from app.utils.my_logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@worker_ready.connect
def worker_ready_handler(sender=None, **kwargs):
    notification_tasks = sorted(name for name in celery_app.tasks if name.startswith("app.tasks."))
    logger.info(f"Notification worker ready: {notification_tasks}")


@task_retry.connect
def task_retry_handler(sender=None, request=None, reason=None, **kwargs):
    logger.warning(f"Retrying {sender.name} {request.args if request else ''}: {reason}")


@task_failure.connect
def task_failure_handler(sender=None, task_id=None, exception=None, args=None, **kwargs):
    # Retries exhausted; the booking itself is unaffected
    logger.error(f"Giving up on {sender.name} {args} (task {task_id}): {exception}")


if __name__ == "__main__":
    celery_app.start([
        'worker',
        '--loglevel=info',
        '--queues=notifications',
        '--concurrency=2',
    ])
