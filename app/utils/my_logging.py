"""Logging configuration"""
import logging
import sys
from app.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Records logged outside a request get '-' instead of a correlation id"""

    def filter(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def setup_logging(verbose=True):
    """Configure application logging for the API and the Celery worker"""
    settings = get_settings()

    if verbose:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler])

    # SQL echo and broker chatter drown out booking logs
    quiet_level = logging.WARNING if verbose else logging.ERROR
    for name in ("sqlalchemy.engine", "sqlalchemy.pool", "kombu", "celery.worker.strategy", "uvicorn.access"):
        logging.getLogger(name).setLevel(quiet_level)
